"""
Compare a student's drawn views against the views of a known solid

Cell types are reduced to filled/empty before comparing; edge flags must
match exactly.
"""

from typing import NamedTuple

import numpy as np

from .config import VIEW_NAMES


class Mismatches(NamedTuple):
    """(row, col) positions that differ between two views"""
    cells: list
    v: list
    h: list

    @property
    def count(self):
        return len(self.cells) + len(self.v) + len(self.h)


class CheckResult(NamedTuple):
    """Verdict per view plus the mismatched positions behind it"""
    views: dict
    mismatches: dict

    @property
    def success(self):
        return all(self.views.values())

    @property
    def failed_views(self):
        return [name for name, ok in self.views.items() if not ok]


def _positions(mask):
    return [tuple(int(i) for i in index) for index in np.argwhere(mask)]


def view_mismatches(user, solution):
    """
    List where a drawn view differs from the solution

    Args:
        user: ViewState drawn by the student
        solution: ViewState computed by project()

    Returns:
        Mismatches of cells, vertical edges and horizontal edges
    """
    if user.resolution != solution.resolution:
        raise ValueError(
            f"Cannot compare resolution {user.resolution} with {solution.resolution}"
        )
    return Mismatches(
        cells=_positions(user.filled != solution.filled),
        v=_positions(user.v != solution.v),
        h=_positions(user.h != solution.h),
    )


def check_view(user, solution):
    """True when the drawn view matches the solution exactly"""
    return view_mismatches(user, solution).count == 0


def check_projections(user, solution):
    """
    Check all three drawn views

    Args:
        user: Projections drawn by the student
        solution: Projections of the level's solid

    Returns:
        CheckResult
    """
    mismatches = {
        name: view_mismatches(getattr(user, name), getattr(solution, name))
        for name in VIEW_NAMES
    }
    views = {name: found.count == 0 for name, found in mismatches.items()}
    return CheckResult(views=views, mismatches=mismatches)
