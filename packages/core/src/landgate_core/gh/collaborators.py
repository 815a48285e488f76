"""Parse the collaborator directory out of the project README.

The README lists people in Markdown bullets under fixed headings:

    ### TSC (Technical Steering Committee)
    * [addaleax](https://github.com/addaleax) -
    **Anna Henningsen** &lt;anna@addaleax.net&gt; (she/her)

TSC members also appear in the Collaborators section; they keep the TSC type.
"""

from __future__ import annotations

import logging
import re

from landgate_core.models import COLLABORATOR, TSC, Collaborator

logger = logging.getLogger(__name__)

TSC_TITLE = "### TSC (Technical Steering Committee)"
TSC_EMERITI_TITLE = "### TSC Emeriti"
CL_TITLE = "### Collaborators"
CL_EMERITI_TITLE = "### Collaborator Emeriti"

CONTACT_RE = re.compile(r"\* \[(.+?)\]\(.+?\) -\s+\*\*(.+?)\*\* (?:&lt;|<)(.+?)(?:&gt;|>)")


def _section(readme: str, title: str, *end_titles: str) -> str | None:
    """Return the text after ``title`` up to the nearest of ``end_titles``."""
    start = readme.find(title)
    if start == -1:
        return None
    start += len(title)
    ends = [i for i in (readme.find(t, start) for t in end_titles) if i != -1]
    return readme[start : min(ends)] if ends else readme[start:]


def _parse_section(text: str, member_type: str, directory: dict[str, Collaborator]) -> None:
    for login, name, email in CONTACT_RE.findall(text):
        key = login.lower()
        if key in directory:
            continue
        directory[key] = Collaborator(login=login, name=name, email=email, type=member_type)


def parse_collaborators(readme: str) -> dict[str, Collaborator]:
    """Return collaborators keyed by lower-cased GitHub login.

    Raises ValueError when the README has no Collaborators section.
    """
    collaborators_text = _section(readme, CL_TITLE, CL_EMERITI_TITLE)
    if collaborators_text is None:
        raise ValueError(f"Couldn't find '{CL_TITLE}' in the README.")

    directory: dict[str, Collaborator] = {}
    tsc_text = _section(readme, TSC_TITLE, TSC_EMERITI_TITLE, CL_TITLE)
    if tsc_text is None:
        logger.debug("README has no TSC section; nobody will count as TSC.")
    else:
        _parse_section(tsc_text, TSC, directory)
    _parse_section(collaborators_text, COLLABORATOR, directory)

    logger.debug("Parsed %d collaborator(s) from README.", len(directory))
    return directory
