"""
State diff computation for efficient updates.
"""

from typing import Any, Dict, List, Optional

from .serialization import sanitize_state

# Patches with more operations than this go out as a full snapshot
MAX_PATCH_OPS = 40

TOP_LEVEL_FIELDS = [
    "version", "phase", "host_id", "turn_index", "turn", "sequences",
    "scores", "win_threshold", "winner", "deck_count", "discard_count",
    "last_move", "game_log",
]


def compute_diff(
    old_state,
    new_state,
    viewer_id: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Compute a JSON Patch-style diff between two states.

    Args:
        old_state: Previous room state
        new_state: New room state
        viewer_id: ID of the player viewing the state

    Returns:
        List of patch operations
    """
    if old_state is None:
        # First state, no diff needed
        return []

    old_sanitized = sanitize_state(old_state, viewer_id)
    new_sanitized = sanitize_state(new_state, viewer_id)

    ops = []

    for field in TOP_LEVEL_FIELDS:
        old_value = old_sanitized.get(field)
        new_value = new_sanitized.get(field)

        if old_value != new_value:
            ops.append({
                "op": "replace",
                "path": f"/{field}",
                "value": new_value
            })

    # Players are an ordered list; membership changes replace the whole list
    old_players = old_sanitized["players"]
    new_players = new_sanitized["players"]

    if [p["id"] for p in old_players] != [p["id"] for p in new_players]:
        ops.append({
            "op": "replace",
            "path": "/players",
            "value": new_players
        })
    else:
        for index, (old_player, new_player) in enumerate(zip(old_players, new_players)):
            for field, new_value in new_player.items():
                if old_player.get(field) != new_value:
                    ops.append({
                        "op": "replace",
                        "path": f"/players/{index}/{field}",
                        "value": new_value
                    })

    old_board = old_sanitized["board"]
    new_board = new_sanitized["board"]

    for row, (old_row, new_row) in enumerate(zip(old_board, new_board)):
        for col, (old_cell, new_cell) in enumerate(zip(old_row, new_row)):
            if old_cell != new_cell:
                ops.append({
                    "op": "replace",
                    "path": f"/board/{row}/{col}",
                    "value": new_cell
                })

    if old_sanitized["layout"] != new_sanitized["layout"]:
        ops.append({
            "op": "replace",
            "path": "/layout",
            "value": new_sanitized["layout"]
        })

    return ops


def should_send_full_state(ops: List[Dict[str, Any]]) -> bool:
    """Check if the diff is large enough that a full state is better."""
    if len(ops) > MAX_PATCH_OPS:
        return True
    return any(op["path"] in ("/players", "/layout", "/phase") for op in ops)


def apply_diff(snapshot: Dict[str, Any], ops: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Apply replace operations to a snapshot dictionary in place.

    Mirrors what a client does with a ``state_patch`` event.
    """
    for op in ops:
        parts = op["path"].strip("/").split("/")
        target = snapshot
        for part in parts[:-1]:
            target = target[int(part)] if isinstance(target, list) else target[part]
        last = parts[-1]
        if isinstance(target, list):
            target[int(last)] = op.get("value")
        else:
            target[last] = op.get("value")
    return snapshot
