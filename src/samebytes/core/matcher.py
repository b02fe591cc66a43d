"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/matcher.py
Groups candidates into sets of byte-identical files, one candidate at a time.

Each new candidate is compared with the representative (first member) of every
existing group, in creation order. The first group that compares equal gets the
candidate appended; if none does, the candidate starts a new singleton group.
Equality is exact, so the first match is the only possible match.
"""

from typing import List, Optional
import logging

from samebytes.core.comparator import create_comparator
from samebytes.core.errors import ComparisonReadError
from samebytes.core.interfaces import ContentComparator, GroupMatcher
from samebytes.core.models import BlockConfiguration, Candidate, Group

logger = logging.getLogger(__name__)


class GroupMatcherImpl(GroupMatcher):
    """
    First-match-wins grouping over an injected ContentComparator.
    Not thread-safe: add_candidate() is the only mutator of the group list.
    """

    def __init__(self, config: BlockConfiguration, comparator: Optional[ContentComparator] = None):
        self.config = config
        self.comparator = comparator or create_comparator(config)
        self._groups: List[Group] = []

    @property
    def groups(self) -> List[Group]:
        return list(self._groups)

    def duplicate_groups(self) -> List[Group]:
        return [g for g in self._groups if g.is_duplicate()]

    def add_candidate(self, candidate: Candidate) -> Group:
        """
        Insert one candidate and return the group it joined or created.

        A group whose representative can no longer be read is retired: it keeps
        its members, is skipped from then on, and the candidate goes on to the
        remaining groups.

        Raises:
            ComparisonReadError: if a block of the candidate itself cannot be read.
                The candidate is not added to any group.
        """
        new_file = self.comparator.track(candidate)
        try:
            for index, group in enumerate(self._groups):
                if group.retired:
                    continue
                try:
                    same = self.comparator.equal(group.representative, new_file)
                except ComparisonReadError as e:
                    if e.path != group.representative.path or e.path == new_file.path:
                        raise
                    self._retire(index, group, e)
                    continue
                if same:
                    group.add_file(new_file)
                    # Only representatives are compared again
                    new_file.close()
                    logger.debug(f"{candidate.path} joined group of {group.representative.path}")
                    return group
        except ComparisonReadError:
            new_file.close()
            raise

        group = Group(files=[new_file])
        self._groups.append(group)
        logger.debug(f"{candidate.path} started group #{len(self._groups)}")
        return group

    @staticmethod
    def _retire(index: int, group: Group, error: ComparisonReadError) -> None:
        group.retired = True
        group.representative.close()
        logger.warning(f"Retiring group #{index + 1}, its representative is unreadable: {error}")

    def retired_groups(self) -> List[Group]:
        return [g for g in self._groups if g.retired]

    def close(self) -> None:
        """Release every read handle still held by tracked files."""
        for group in self._groups:
            for file in group.files:
                file.close()

    def __enter__(self) -> "GroupMatcherImpl":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
