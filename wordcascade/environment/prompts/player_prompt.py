from typing import List, Optional

from ...engine.board import BOARD_SIZE, EMPTY, Board


def format_board(board: Board) -> str:
    """Render the board with row and column indices."""
    header = "    " + " ".join(str(c) for c in range(BOARD_SIZE))
    lines = [header]
    for r, row in enumerate(board):
        cells = " ".join(cell if cell != EMPTY else "." for cell in row)
        lines.append(f"{r} | {cells}")
    return "\n".join(lines)


def format_feedback(
    accepted: Optional[List[str]] = None,
    rejected: Optional[List[str]] = None,
    parse_errors: Optional[List[str]] = None,
    action_error: Optional[str] = None,
) -> str:
    """Format feedback from the previous turn."""
    lines = []

    if action_error:
        lines.append(f"Turn failed: {action_error}")

    if accepted:
        lines.append(f"Accepted: {', '.join(accepted)}")

    if rejected:
        lines.append("Rejected:")
        for item in rejected:
            lines.append(f"  - {item}")

    if parse_errors:
        lines.append("Could not read:")
        for err in parse_errors:
            lines.append(f"  - {err}")

    if not lines:
        return ""

    return "\n".join(lines)


def build_player_prompt(
    board: Board,
    turn_number: int,
    score: int,
    level: int,
    remaining_seconds: float,
    min_word_length: int,
    accepted: Optional[List[str]] = None,
    rejected: Optional[List[str]] = None,
    parse_errors: Optional[List[str]] = None,
    action_error: Optional[str] = None,
) -> str:
    """
    Build the player prompt with current match state and feedback.

    Args:
        board: Current board
        turn_number: Current turn number
        score: Score so far
        level: Current level
        remaining_seconds: Time left on the clock
        min_word_length: Shortest word accepted at this level
        accepted: Words accepted last turn
        rejected: Rejection descriptions from last turn
        parse_errors: Lines of the last reply that could not be parsed
        action_error: Error from the last turn, if it failed outright

    Returns:
        Formatted prompt string
    """
    lines = [f"## Turn {turn_number}", ""]

    feedback = format_feedback(accepted, rejected, parse_errors, action_error)
    if feedback:
        lines.append("### Feedback from last turn")
        lines.append(feedback)
        lines.append("")

    lines.append("### Match State")
    lines.append(f"- Score: {score}")
    lines.append(f"- Level: {level}")
    lines.append(f"- Time left: {remaining_seconds:.0f}s")
    lines.append(f"- Minimum word length: {min_word_length}")
    lines.append("")

    lines.append("### Board")
    lines.append("```")
    lines.append(format_board(board))
    lines.append("```")

    return "\n".join(lines)
