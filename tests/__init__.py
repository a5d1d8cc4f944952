"""
Test package marker.

Lets test modules share doubles via `tests.fakes` when pytest imports them as a package.
"""
