"""Dynamic prompt construction for context-aware assistant requests."""


def build_checklist_prompt(checklist: str, task_number: int, task: str, update: str) -> str:
    """Build the user prompt for a free-text checklist update."""
    return (
        f"Checklist: {checklist}\n"
        f"Current task {task_number}: {task}\n"
        f"Checklist update: {update}"
    )


def build_maintenance_prompt(report: str) -> str:
    """Build the user prompt for a maintenance report."""
    return f"Maintenance report: {report}"
