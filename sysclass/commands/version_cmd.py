"""Version command - displays sysclass version information."""

from sysclass.version import SYSCLASS_VERSION


def run_version(verbose: bool = False) -> str:
    """
    Return sysclass version information.

    Args:
        verbose: If True, include the full hash and release date
    """
    if not verbose:
        return f"sysclass {SYSCLASS_VERSION}"
    return "\n".join(
        [
            f"sysclass version {SYSCLASS_VERSION.full_version()}",
            "",
            "Detailed version information:",
            f"  Semantic Version: {SYSCLASS_VERSION}",
            f"  Release Date:     {SYSCLASS_VERSION.date_string()}",
            f"  Package Hash:     {SYSCLASS_VERSION.hash}",
        ]
    )
