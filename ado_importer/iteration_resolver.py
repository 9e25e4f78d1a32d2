"""
Iteration Resolver - Optional lookup of the iteration a story belongs to.

Resolving a team's next sprint (by dates) or an iteration by name is not
implemented yet. Both lookups return None, which the BatchImporter treats as
"no mapping": the System.IterationPath field is then left out of the patch
document instead of being sent empty.
"""

from typing import Optional


class IterationResolver:
    """Resolve iteration paths for user stories."""

    def find_next_iteration(self, team: str) -> Optional[str]:
        """Return the next iteration path for a team, based on dates."""
        return None

    def find_iteration(self, name: str) -> Optional[str]:
        """Return the iteration path matching an iteration name."""
        return None
