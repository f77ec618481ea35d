"""Turn-by-turn instruction synthesis from a path."""

from dataclasses import replace
from typing import Callable, Optional, Sequence

from .config import CONFIG
from .models import Node, NodeKind, Instruction
from .geo import euclidean_distance, cardinal_heading, relative_turn

ALREADY_THERE = "already at destination"
ARRIVED = "arrived at destination"


def _at_destination() -> list[Instruction]:
    return [Instruction(text=ALREADY_THERE, action="at destination")]


def _arrived(segment_count: int) -> Instruction:
    return Instruction(text=ARRIVED, action="arrive",
                       first_segment=segment_count, last_segment=segment_count)


def _walk_straight(distance: Optional[float], first: int, last: int) -> Instruction:
    if distance is None:
        text = "Walk straight"
    else:
        text = f"Walk straight for {distance:.1f} {CONFIG['distance_unit']}"
    return Instruction(text=text, action="straight", distance=distance,
                       first_segment=first, last_segment=last)


def _merge_turns(path: Sequence[Node], with_distance: bool) -> list[Instruction]:
    """Merge straight runs into one step, emitting turns as they occur"""
    instructions: list[Instruction] = []
    prev_heading: Optional[str] = None
    pending: Optional[float] = None  # accumulated straight distance
    pending_first = 0

    def flush(last: int):
        if pending is not None:
            instructions.append(
                _walk_straight(pending if with_distance else None, pending_first, last)
            )

    for i, (current, nxt) in enumerate(zip(path, path[1:])):
        heading = cardinal_heading(current.x, current.y, nxt.x, nxt.y)
        length = euclidean_distance(current.x, current.y, nxt.x, nxt.y)
        turn = "straight" if prev_heading is None else relative_turn(prev_heading, heading)

        if turn == "straight" and pending is not None:
            pending += length
        else:
            flush(i - 1)
            if turn != "straight":
                # the turn happens at path[i], the end of segment i - 1
                instructions.append(Instruction(text=turn.capitalize(), action=turn,
                                                first_segment=i - 1, last_segment=i - 1))
            pending = length
            pending_first = i
        prev_heading = heading

    flush(len(path) - 2)
    instructions.append(_arrived(len(path) - 1))
    return instructions


def turn_distance_strategy(path: Sequence[Node]) -> list[Instruction]:
    """Turns plus accumulated straight distances"""
    return _merge_turns(path, with_distance=True)


def turn_only_strategy(path: Sequence[Node]) -> list[Instruction]:
    """Turns only; straight runs carry no distance"""
    return _merge_turns(path, with_distance=False)


def cardinal_strategy(path: Sequence[Node]) -> list[Instruction]:
    """One compass-heading step per segment, naming the node walked towards"""
    instructions = []
    for i, (current, nxt) in enumerate(zip(path, path[1:])):
        if current.kind == NodeKind.ENTRANCE:
            text = "Start from the main entrance"
        elif nxt.kind == NodeKind.PARKING:
            text = f"Head to parking spot {nxt.id}"
        else:
            heading = cardinal_heading(current.x, current.y, nxt.x, nxt.y)
            text = f"Walk {heading} towards {nxt.id}"
        length = euclidean_distance(current.x, current.y, nxt.x, nxt.y)
        instructions.append(Instruction(text=text, action="walk", distance=length,
                                        first_segment=i, last_segment=i))
    instructions.append(_arrived(len(path) - 1))
    return instructions


STRATEGIES: dict[str, Callable[[Sequence[Node]], list[Instruction]]] = {
    "turn_distance": turn_distance_strategy,
    "turn_only": turn_only_strategy,
    "cardinal": cardinal_strategy,
}


def synthesize(path: Sequence[Node], strategy: Optional[str] = None) -> list[Instruction]:
    """Turn a path into ordered movement instructions.

    Output depends only on the coordinates, ids, kinds and order of the path
    nodes.
    """
    name = strategy or CONFIG["direction_strategy"]
    if name not in STRATEGIES:
        raise ValueError(f"Unknown direction strategy: {name!r} (expected one of {sorted(STRATEGIES)})")
    if len(path) <= 1:
        return _at_destination()
    return STRATEGIES[name](path)


def annotate_progress(instructions: Sequence[Instruction],
                      segment_index: Optional[int]) -> list[Instruction]:
    """Flag the instruction for the segment the user is on as current.

    Every instruction before it is flagged passed. With no segment index
    (not tracked) all flags are cleared.
    """
    if segment_index is None:
        return [replace(ins, current=False, passed=False) for ins in instructions]

    annotated = []
    found = False
    for ins in instructions:
        if not found and ins.last_segment >= segment_index:
            annotated.append(replace(ins, current=True, passed=False))
            found = True
        else:
            annotated.append(replace(ins, current=False, passed=not found))
    return annotated


def instruction_texts(instructions: Sequence[Instruction]) -> list[str]:
    return [ins.text for ins in instructions]
