"""
Plain-text instance files.

Layout: the first line holds the capacity and the item count separated by a
space; each following line holds one item as `weight value`.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from ..core.errors import InvalidInputError, TypeMismatchError
from ..core.problem import KnapsackProblem

PathLike = Union[str, Path]


def _fmt(number: float) -> str:
    # whole numbers without a trailing '.0', everything else at full precision
    return str(int(number)) if float(number).is_integer() else repr(float(number))


def format_instance(problem: KnapsackProblem) -> str:
    lines = [f"{_fmt(problem.capacity)} {problem.n_items}"]
    lines.extend(f"{_fmt(w)} {_fmt(v)}" for w, v in zip(problem.weights.tolist(), problem.values.tolist()))
    return "\n".join(lines) + "\n"


def write_instance(path: PathLike, problem: KnapsackProblem) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_instance(problem))
    return path


def parse_instance(text: str, *, integral: bool = False, source: str = "<string>") -> KnapsackProblem:
    rows = [line.split() for line in text.splitlines()]
    rows = [(lineno, parts) for lineno, parts in enumerate(rows, start=1) if parts]
    if not rows:
        raise InvalidInputError(f"{source}: empty instance file")

    header_line, header = rows[0]
    if len(header) != 2:
        raise InvalidInputError(f"{source}:{header_line}: expected 'capacity item_count', got {' '.join(header)!r}")
    capacity = _number(header[0], source, header_line)
    count = _number(header[1], source, header_line)
    if not count.is_integer() or count < 0:
        raise InvalidInputError(f"{source}:{header_line}: item count must be a non-negative integer")
    count = int(count)

    body = rows[1:]
    if len(body) != count:
        raise InvalidInputError(f"{source}: header announces {count} items, found {len(body)}")

    weights: List[float] = []
    values: List[float] = []
    for lineno, parts in body:
        if len(parts) != 2:
            raise InvalidInputError(f"{source}:{lineno}: expected 'weight value', got {' '.join(parts)!r}")
        weights.append(_number(parts[0], source, lineno))
        values.append(_number(parts[1], source, lineno))

    if integral and (not capacity.is_integer() or any(not w.is_integer() for w in weights)):
        raise TypeMismatchError(f"{source}: integral instance expected, found fractional weights or capacity")
    return KnapsackProblem(values, weights, capacity)


def read_instance(path: PathLike, *, integral: bool = False) -> KnapsackProblem:
    path = Path(path)
    return parse_instance(path.read_text(), integral=integral, source=str(path))


def _number(token: str, source: str, lineno: int) -> float:
    try:
        return float(token)
    except ValueError as exc:
        raise InvalidInputError(f"{source}:{lineno}: not a number: {token!r}") from exc
