"""Names that end up in file and directory names on disk."""

import re
from typing import Annotated

from pydantic import StringConstraints

SAFE_NAME_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9_.-]*$"

# A leading letter or digit rules out "." and ".." as whole names.
SafeName = Annotated[str, StringConstraints(pattern=SAFE_NAME_PATTERN)]


def is_safe_name(name: str) -> bool:
    return re.fullmatch(SAFE_NAME_PATTERN, name) is not None
