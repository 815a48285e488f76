"""GitHub ``authorAssociation`` values."""

FIRST_TIME_CONTRIBUTOR = "FIRST_TIME_CONTRIBUTOR"
FIRST_TIMER = "FIRST_TIMER"
CONTRIBUTOR = "CONTRIBUTOR"
COLLABORATOR = "COLLABORATOR"
MEMBER = "MEMBER"
OWNER = "OWNER"
NONE = "NONE"

_NEW_AUTHOR = {FIRST_TIME_CONTRIBUTOR, FIRST_TIMER}


def is_new_author(association: str) -> bool:
    return association in _NEW_AUTHOR
