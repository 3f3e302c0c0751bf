#!/usr/bin/env python3
"""lsystem3d.py

A 3D turtle interpreter for L-system command strings.

Key features:
- Bracketed, parametric command strings: F(2)[-F[-F]F]/(137.5)F(1.5)[-F]F
- Heading/Left/Up orientation frame tracked as a 3x3 matrix.
- Branching via a per-run state stack (no shared state between runs).
- Optional streaming rewriting of an axiom with production rules.
- JSON and plain-text input; JSON or text segment output.
- Random config generator for experimentation.

Run:
  python lsystem3d.py interpret config.json segments.json
  python lsystem3d.py validate config.json
  python lsystem3d.py random out.json --seed 123
  python lsystem3d.py --help
"""

from __future__ import annotations

import argparse
import enum
import itertools
import json
import logging
import math
import os
import random
import sys
import warnings
from collections.abc import Generator
from dataclasses import dataclass
from typing import Any, Literal, TextIO, cast

logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]
Mat3 = tuple[Vec3, Vec3, Vec3]
Segment = tuple[Vec3, Vec3]

ORIGIN: Vec3 = (0.0, 0.0, 0.0)
DEFAULT_STEP = 1.0
DEFAULT_ANGLE = 45.0


# -------------------------
# Errors / Validation
# -------------------------


class ConfigError(ValueError):
    pass


class ParseError(ValueError):
    """Malformed command string; ``index`` points at the offending symbol."""

    def __init__(self, msg: str, index: int) -> None:
        super().__init__(f"{msg} (at index {index})")
        self.index = index


class StructuralWarning(UserWarning):
    """Unbalanced branch brackets, reported only in strict mode."""


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)


def _as_float(x: Any, path: str) -> float:
    _require(
        isinstance(x, (int, float)) and not isinstance(x, bool),
        f"{path} must be a number",
    )
    _require(math.isfinite(x), f"{path} must be finite")
    return float(x)


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer"
    )
    return int(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_bool(x: Any, path: str) -> bool:
    _require(isinstance(x, bool), f"{path} must be a boolean")
    return cast(bool, x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


# -------------------------
# 3x3 matrix kernel
# -------------------------


def mat_mul(a: Mat3, b: Mat3) -> Mat3:
    return cast(
        Mat3,
        tuple(
            tuple(sum(a[i][k] * b[k][j] for k in range(3)) for j in range(3))
            for i in range(3)
        ),
    )


def mat_vec(m: Mat3, v: Vec3) -> Vec3:
    return cast(Vec3, tuple(sum(m[i][j] * v[j] for j in range(3)) for i in range(3)))


def vec_add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def column(m: Mat3, j: int) -> Vec3:
    return (m[0][j], m[1][j], m[2][j])


# The rotations below are right-multiplied onto the orientation matrix, so
# they turn the turtle about its own (local) axes.


def ru(angle_deg: float) -> Mat3:
    """Rotation about the Up axis (yaw)."""
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    return ((c, s, 0.0), (-s, c, 0.0), (0.0, 0.0, 1.0))


def rl(angle_deg: float) -> Mat3:
    """Rotation about the Left axis (pitch)."""
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    return ((c, 0.0, -s), (0.0, 1.0, 0.0), (s, 0.0, c))


def rh(angle_deg: float) -> Mat3:
    """Rotation about the Heading axis (roll)."""
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    return ((1.0, 0.0, 0.0), (0.0, c, -s), (0.0, s, c))


# -------------------------
# Argument scanner
# -------------------------


def get_argument(desc: str, start: int) -> tuple[float | None, int]:
    """Read the optional ``(number)`` following the symbol at ``start``.

    Returns ``(value, consumed)`` where ``consumed`` counts the characters
    after the symbol that belong to the argument, parentheses included.
    Without an argument this is ``(None, 0)``.
    """
    if start + 1 >= len(desc) or desc[start + 1] != "(":
        return None, 0

    close = desc.find(")", start + 2)
    if close == -1:
        raise ParseError(f"unterminated argument for '{desc[start]}'", start)

    text = desc[start + 2 : close]
    try:
        value = float(text)
    except ValueError:
        raise ParseError(
            f"invalid argument {text!r} for '{desc[start]}'", start
        ) from None
    if not math.isfinite(value):
        raise ParseError(f"non-finite argument {text!r} for '{desc[start]}'", start)
    return value, close - start


# -------------------------
# Turtle state / branch stack
# -------------------------

# Columns are Heading, Left, Up: heading +Y, left +X, up +Z.
INITIAL_ORIENTATION: Mat3 = ((0.0, 1.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0))


@dataclass(frozen=True)
class TurtleState:
    orientation: Mat3
    position: Vec3

    @classmethod
    def initial(cls, start: Vec3 = ORIGIN) -> TurtleState:
        x, y, z = start
        return cls(INITIAL_ORIENTATION, (float(x), float(y), float(z)))

    @property
    def heading(self) -> Vec3:
        return column(self.orientation, 0)

    @property
    def left(self) -> Vec3:
        return column(self.orientation, 1)

    @property
    def up(self) -> Vec3:
        return column(self.orientation, 2)


class BranchStack:
    """LIFO of turtle snapshots. One instance per interpretation run."""

    def __init__(self) -> None:
        self._frames: list[TurtleState] = []

    def __len__(self) -> int:
        return len(self._frames)

    def push(self, state: TurtleState) -> None:
        self._frames.append(state)

    def pop(self) -> TurtleState | None:
        if not self._frames:
            return None
        return self._frames.pop()

    def clear(self) -> int:
        """Drop all frames and return how many there were."""
        n = len(self._frames)
        self._frames.clear()
        return n


class StackOp(enum.Enum):
    NONE = 0
    PUSH = 1
    POP = 2


@dataclass
class Interpretation:
    segments: list[Segment]
    final_state: TurtleState
    unclosed_branches: int = 0
    unmatched_pops: int = 0


# -------------------------
# Turtle interpreter
# -------------------------

# symbol -> (rotation constructor, angle sign, label)
_ROTATIONS = {
    "+": (ru, 1.0, "yaw left"),
    "-": (ru, -1.0, "yaw right"),
    "&": (rl, 1.0, "pitch down"),
    "^": (rl, -1.0, "pitch up"),
    "\\": (rh, 1.0, "roll left"),
    "/": (rh, -1.0, "roll right"),
}


def interpret_to_segments(
    desc: str,
    *,
    step: float = DEFAULT_STEP,
    angle_deg: float = DEFAULT_ANGLE,
    start: Vec3 = ORIGIN,
    strict: bool = False,
) -> Interpretation:
    """Interpret a command string to an ordered list of 3D segments.

    Symbols:
      - F(len): move forward along Heading and draw a segment
      - +(a) / -(a): yaw about Up
      - &(a) / ^(a): pitch about Left
      - \\(a) / /(a): roll about Heading
      - [ / ]: push / pop the turtle state
      - anything else: ignored

    Symbols without an argument use ``step`` (for F) or ``angle_deg``.
    A ``]`` with nothing to pop is ignored; branches left open at the end are
    discarded. With ``strict=True`` both cases issue a StructuralWarning; the
    geometry is the same either way.
    """

    _require(math.isfinite(step), "turtle.step must be finite")
    _require(math.isfinite(angle_deg), "turtle.angle must be finite")

    state = TurtleState.initial(start)
    stack = BranchStack()
    segments: list[Segment] = []
    unmatched_pops = 0

    i = 0
    n = len(desc)
    while i < n:
        sym = desc[i]
        arg, jump = get_argument(desc, i)
        op = StackOp.NONE

        if sym == "F":
            length = step if arg is None else arg
            old = state.position
            new = vec_add(old, mat_vec(state.orientation, (length, 0.0, 0.0)))
            segments.append((old, new))
            state = TurtleState(state.orientation, new)
            logger.debug("F(%g): segment %s -> %s", length, old, new)
        elif sym in _ROTATIONS:
            rotation, sign, label = _ROTATIONS[sym]
            a = angle_deg if arg is None else arg
            state = TurtleState(
                mat_mul(state.orientation, rotation(sign * a)), state.position
            )
            logger.debug("%s(%g): %s", sym, a, label)
        elif sym == "[":
            op = StackOp.PUSH
        elif sym == "]":
            op = StackOp.POP

        i += jump + 1

        if op is StackOp.PUSH:
            stack.push(state)
            logger.debug("[: push (depth %d)", len(stack))
        elif op is StackOp.POP:
            restored = stack.pop()
            if restored is None:
                unmatched_pops += 1
                logger.debug("]: empty stack, ignored")
            else:
                state = restored
                logger.debug("]: pop (depth %d)", len(stack))

    unclosed = stack.clear()

    if strict and unmatched_pops:
        warnings.warn(
            f"{unmatched_pops} ']' without matching '['", StructuralWarning, stacklevel=2
        )
    if strict and unclosed:
        warnings.warn(
            f"{unclosed} '[' without matching ']'", StructuralWarning, stacklevel=2
        )

    return Interpretation(
        segments=segments,
        final_state=state,
        unclosed_branches=unclosed,
        unmatched_pops=unmatched_pops,
    )


# -------------------------
# Streaming expansion
# -------------------------


def stream_expand(
    axiom: str, rules: dict[str, str], iterations: int
) -> Generator[str, None, None]:
    """Yield expanded symbols in order without building the full string.

    Uses an explicit stack of (string, index, depth) frames. Parenthesised
    argument text is copied through verbatim and never rewritten, so an
    argument written after a rewritten symbol binds to the last symbol of its
    replacement.
    """
    _require(iterations >= 0, "iterations must be >= 0")

    stack: list[tuple[str, int, int]] = [(axiom, 0, 0)]

    while stack:
        s, i, d = stack.pop()
        if i >= len(s):
            continue

        ch = s[i]
        if ch == "(":
            close = s.find(")", i)
            end = len(s) if close == -1 else close + 1
            stack.append((s, end, d))
            yield from s[i:end]
            continue

        stack.append((s, i + 1, d))

        if d < iterations and ch in rules:
            # Replacement sits on top of the continuation, so it is fully
            # traversed before the rest of the current string.
            stack.append((rules[ch], 0, d + 1))
        else:
            yield ch


def expand(axiom: str, rules: dict[str, str], iterations: int) -> str:
    return "".join(stream_expand(axiom, rules, iterations))


def _trim_partial_argument(desc: str) -> str:
    # A truncated expansion may end inside "(...)"; drop that last symbol.
    open_i = desc.rfind("(")
    if open_i > desc.rfind(")"):
        return desc[: max(open_i - 1, 0)]
    return desc


# -------------------------
# Config parsing
# -------------------------

_OutputFormat = Literal["json", "text"]


@dataclass(frozen=True)
class RenderConfig:
    name: str
    axiom: str
    iterations: int
    rules: dict[str, str]

    step: float
    angle_deg: float
    start: Vec3
    strict: bool

    # output
    precision: int
    fmt: _OutputFormat


def parse_config(obj: dict[str, Any]) -> RenderConfig:
    obj = _as_dict(obj, "root")

    name = _as_str(obj.get("name", "L-System"), "name")
    axiom = _as_str(obj.get("axiom", ""), "axiom")
    _require(len(axiom) > 0, "axiom must be non-empty")

    iterations = _as_int(obj.get("iterations", 0), "iterations")
    _require(iterations >= 0, "iterations must be >= 0")

    rules_obj = _as_dict(obj.get("rules", {}), "rules")
    rules: dict[str, str] = {}
    for k, v in rules_obj.items():
        _require(
            isinstance(k, str) and len(k) == 1,
            "rules keys must be single-character strings",
        )
        _require(k not in "()", "rules keys must not be parentheses")
        rules[k] = _as_str(v, f"rules['{k}']")

    turtle = _as_dict(obj.get("turtle", {}), "turtle")
    step = _as_float(turtle.get("step", DEFAULT_STEP), "turtle.step")
    angle_deg = _as_float(turtle.get("angle", DEFAULT_ANGLE), "turtle.angle")
    strict = _as_bool(turtle.get("strict", False), "turtle.strict")

    start_obj = _as_dict(turtle.get("start", {}), "turtle.start")
    start = (
        _as_float(start_obj.get("x", 0), "turtle.start.x"),
        _as_float(start_obj.get("y", 0), "turtle.start.y"),
        _as_float(start_obj.get("z", 0), "turtle.start.z"),
    )

    output = _as_dict(obj.get("output", {}), "output")
    precision = _as_int(output.get("precision", 6), "output.precision")
    _require(0 <= precision <= 15, "output.precision must be between 0 and 15")
    fmt = _as_str(output.get("format", "json"), "output.format")
    _require(fmt in ("json", "text"), "output.format must be 'json' or 'text'")

    return RenderConfig(
        name=name,
        axiom=axiom,
        iterations=iterations,
        rules=rules,
        step=step,
        angle_deg=angle_deg,
        start=start,
        strict=strict,
        precision=precision,
        fmt=cast(_OutputFormat, fmt),
    )


def parse_desc_text(text: str, *, name: str = "L-System") -> RenderConfig:
    """Parse the plain input format: ``<step> <angle> <description>``."""
    tokens = text.split()
    _require(
        len(tokens) == 3,
        "description input must be '<step> <angle> <description>'",
    )
    try:
        step, angle_deg = float(tokens[0]), float(tokens[1])
    except ValueError as e:
        raise ConfigError(f"step and angle must be numbers: {e}") from e
    return parse_config(
        {
            "name": name,
            "axiom": tokens[2],
            "turtle": {"step": step, "angle": angle_deg},
        }
    )


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            return cast(dict[str, Any], json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def load_config(path: str) -> RenderConfig:
    """Load a ``.json`` config, or any other file as the plain format."""
    if path.lower().endswith(".json"):
        return parse_config(load_json(path))
    with open(path, encoding="utf-8") as f:
        text = f.read()
    return parse_desc_text(text, name=os.path.splitext(os.path.basename(path))[0])


# -------------------------
# Segment output
# -------------------------


def compute_bounds(segments: list[Segment]) -> tuple[Vec3, Vec3]:
    _require(len(segments) > 0, "No drawable geometry produced.")
    points = [p for seg in segments for p in seg]
    lo = cast(Vec3, tuple(min(p[k] for p in points) for k in range(3)))
    hi = cast(Vec3, tuple(max(p[k] for p in points) for k in range(3)))
    return lo, hi


def _round(x: float, precision: int) -> float:
    # Normalise -0.0 so it never shows up in the output.
    return round(x, precision) + 0.0


def _fmt(x: float, precision: int) -> str:
    if not x:
        x = 0.0
    s = f"{x:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s in ("", "-0"):
        s = "0"
    return s


def _ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)


def _write_segments_to(
    f: TextIO,
    segments: list[Segment],
    *,
    fmt: _OutputFormat,
    precision: int,
    name: str | None,
) -> None:
    if fmt == "json":
        doc: dict[str, Any] = {}
        if name:
            doc["name"] = name
        doc["segments"] = [
            [[_round(c, precision) for c in a], [_round(c, precision) for c in b]]
            for a, b in segments
        ]
        json.dump(doc, f, indent=None, ensure_ascii=False)
        f.write("\n")
        return

    if name:
        f.write(f"# {name}\n")
    for a, b in segments:
        f.write(" ".join(_fmt(c, precision) for c in (*a, *b)))
        f.write("\n")


def write_segments(
    segments: list[Segment],
    *,
    out_path: str,
    fmt: _OutputFormat = "json",
    precision: int = 6,
    name: str | None = None,
) -> None:
    """Write segments as JSON or as text lines ``x1 y1 z1 x2 y2 z2``.

    ``out_path == "-"`` writes to stdout.
    """
    _require(fmt in ("json", "text"), f"unknown output format {fmt!r}")

    if out_path == "-":
        _write_segments_to(
            sys.stdout, segments, fmt=fmt, precision=precision, name=name
        )
        return

    _ensure_parent_dir(out_path)
    with open(out_path, "w", encoding="utf-8") as f:
        _write_segments_to(f, segments, fmt=fmt, precision=precision, name=name)


# -------------------------
# Random config generator
# -------------------------

_TURNS = "+-&^\\/"


def _random_balanced_word(
    rng: random.Random, length: int, *, p_branch: float = 0.20
) -> str:
    """Generate a random replacement word with balanced brackets.

    Produces symbols from: F, the six rotations, [, ]
    Ensures brackets are balanced and never go negative.
    """
    word: list[str] = []
    depth = 0

    for _ in range(length):
        r = rng.random()
        if r < p_branch and depth < 3:
            word.append("[")
            depth += 1
            continue
        # At depth 0 the ']' share falls through to forward/turn choices.
        if r < p_branch * 2 and depth > 0:
            word.append("]")
            depth -= 1
            continue

        t = rng.random()
        if t < 0.5:
            word.append("F")
        elif t < 0.6:
            # occasional explicit roll, phyllotaxis style
            word.append("/(137.5)")
        else:
            word.append(rng.choice(_TURNS))

    word.extend("]" * depth)

    if "F" not in word:
        word.append("F")

    return "".join(word)


def generate_random_config(seed: int | None = None) -> dict[str, Any]:
    rng = random.Random(seed)

    angle = rng.choice([15, 18, 20, 22.5, 25, 28, 30, 36, 45])
    iterations = rng.randint(2, 4)
    step = rng.choice([0.5, 1, 1.5, 2])

    use_x = rng.random() < 0.5

    if use_x:
        axiom = "X"
        rule_f = _random_balanced_word(rng, rng.randint(4, 10))
        x_parts = []
        for _ in range(rng.randint(3, 6)):
            roll = rng.random()
            if roll < 0.4:
                x_parts.append("F")
            elif roll < 0.6:
                x_parts.append("X")
            elif roll < 0.9:
                x_parts.append(rng.choice(_TURNS))
            else:
                x_parts.append("[X]")
        if "F" not in x_parts:
            x_parts.append("F")
        rules = {"F": rule_f, "X": "".join(x_parts)}
    else:
        axiom = "F"
        rules = {"F": _random_balanced_word(rng, rng.randint(6, 14))}

    cfg = {
        "name": "Random L-System",
        "axiom": axiom,
        "iterations": iterations,
        "rules": rules,
        "turtle": {
            "step": step,
            "angle": angle,
            "start": {"x": 0, "y": 0, "z": 0},
        },
        "output": {"format": "json", "precision": 6},
    }

    # Generated config must always parse cleanly.
    parse_config(cfg)
    return cfg


def dump_json(obj: dict[str, Any], path: str) -> None:
    _ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
        f.write("\n")


# -------------------------
# CLI / Help
# -------------------------

HELP_EPILOG = r"""
INPUT (interpret, validate)

Either a JSON config (file name ending in .json) or a plain text file
holding three whitespace-separated fields:

    <step> <angle> <description>

e.g.

    1 45 F(2)[-F[-F]F]/(137.5)F(1.5)[-F]F

JSON config keys

  name: string (optional)
      Written into the output.

  axiom: string (required)
      The command string, or the start word when rules are given.

  iterations: integer >= 0 (default 0)
  rules: object mapping single-character string -> string (optional)
      Production rules applied `iterations` times before interpretation.
      Argument text in parentheses is never rewritten.

  turtle.step: number (default 1)
      Length of F when it carries no argument.
  turtle.angle: number, degrees (default 45)
      Angle of a rotation symbol when it carries no argument.
  turtle.start: {x, y, z} (default origin)
  turtle.strict: boolean (default false)
      Warn about unbalanced brackets.

  output.format: "json" | "text" (default "json")
  output.precision: integer 0..15 (default 6)

COMMAND STRING

  F(len)   forward along Heading, drawing a segment
  +(a)     yaw left about Up          -(a)   yaw right
  &(a)     pitch down about Left      ^(a)   pitch up
  \(a)     roll left about Heading    /(a)   roll right
  [        save turtle state          ]      restore it
  other    ignored

  The turtle starts heading +Y, with Left = +X and Up = +Z.

OUTPUT

  json: {"name": ..., "segments": [[[x1,y1,z1],[x2,y2,z2]], ...]}
  text: one segment per line: x1 y1 z1 x2 y2 z2

  Use "-" as OUTPUT to write to stdout.
"""


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lsystem3d",
        description="3D turtle interpreter for L-system command strings.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Trace every turtle action."
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    pi = sub.add_parser(
        "interpret",
        help="Interpret a config and write the resulting segments.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pi.add_argument("config", help="Path to a JSON config or plain description.")
    pi.add_argument("output", help="Where to write the segments ('-' for stdout).")
    pi.add_argument(
        "--format",
        choices=["json", "text"],
        default=None,
        help="Output format. Default: output.format from the config.",
    )
    pi.add_argument(
        "--strict",
        action="store_true",
        help="Warn about unbalanced brackets.",
    )

    pv = sub.add_parser(
        "validate",
        help="Validate a config and print a brief summary.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pv.add_argument("config", help="Path to a JSON config or plain description.")

    pg = sub.add_parser(
        "random",
        help="Generate a random JSON config for experimentation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pg.add_argument("output", help="Where to write the generated JSON file.")
    pg.add_argument(
        "--seed", type=int, default=None, help="Seed for repeatable randomness."
    )

    return p


# -------------------------
# Commands
# -------------------------


def cmd_interpret(
    config_path: str, output_path: str, fmt: _OutputFormat | None, strict: bool
) -> None:
    cfg = load_config(config_path)

    desc = expand(cfg.axiom, cfg.rules, cfg.iterations)
    logger.info("expanded %r to %d symbols", cfg.name, len(desc))

    result = interpret_to_segments(
        desc,
        step=cfg.step,
        angle_deg=cfg.angle_deg,
        start=cfg.start,
        strict=strict or cfg.strict,
    )

    write_segments(
        result.segments,
        out_path=output_path,
        fmt=fmt or cfg.fmt,
        precision=cfg.precision,
        name=cfg.name,
    )
    logger.info("wrote %d segments to %s", len(result.segments), output_path)


_VALIDATE_SYMBOL_LIMIT = 100_000


def cmd_validate(config_path: str) -> None:
    cfg = load_config(config_path)

    print(f"name: {cfg.name}")
    print(f"axiom length: {len(cfg.axiom)}")
    print(f"iterations: {cfg.iterations}")
    print(f"rules: {len(cfg.rules)}")
    print(
        "turtle: "
        f"step={cfg.step} angle={cfg.angle_deg} "
        f"start=({cfg.start[0]},{cfg.start[1]},{cfg.start[2]})"
    )

    # Bounded expansion + interpretation to catch interpret-time failures
    # (e.g. malformed arguments, no geometry, exponential blow-up).
    raw = stream_expand(cfg.axiom, cfg.rules, cfg.iterations)
    bounded = "".join(itertools.islice(raw, _VALIDATE_SYMBOL_LIMIT))
    truncated = len(bounded) == _VALIDATE_SYMBOL_LIMIT
    if truncated:
        bounded = _trim_partial_argument(bounded)

    result = interpret_to_segments(
        bounded,
        step=cfg.step,
        angle_deg=cfg.angle_deg,
        start=cfg.start,
    )
    sym_label = f"{len(bounded)}+" if truncated else str(len(bounded))
    print(f"symbols (sampled): {sym_label}")
    print(f"segments: {len(result.segments)}")
    if result.segments:
        lo, hi = compute_bounds(result.segments)
        print(
            "bounds: "
            + " ".join(
                f"{axis}=[{_fmt(a, 3)}, {_fmt(b, 3)}]"
                for axis, a, b in zip("xyz", lo, hi)
            )
        )
    if result.unmatched_pops or result.unclosed_branches:
        print(
            f"warning: unbalanced brackets ({result.unmatched_pops} unmatched ']', "
            f"{result.unclosed_branches} unclosed '[')"
        )
    if truncated:
        print(
            f"warning: expansion exceeds {_VALIDATE_SYMBOL_LIMIT} symbols; "
            "geometry stats are based on the first portion only"
        )
    if not result.segments:
        raise ConfigError("Config produces no drawable geometry")


def cmd_random(output_path: str, seed: int | None) -> None:
    cfg = generate_random_config(seed)
    dump_json(cfg, output_path)


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.cmd == "interpret":
            cmd_interpret(
                args.config,
                args.output,
                cast("_OutputFormat | None", args.format),
                args.strict,
            )
        elif args.cmd == "validate":
            cmd_validate(args.config)
        elif args.cmd == "random":
            cmd_random(args.output, args.seed)
        else:
            raise AssertionError("unreachable")
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
