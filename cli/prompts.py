"""Interactive prompts shared by the CLI commands."""


def confirm(question: str) -> bool:
    """Ask a yes/no question; only an explicit "yes" counts as agreement."""
    answer = input(f"\n{question} (yes/no): ").strip().lower()
    return answer == "yes"
