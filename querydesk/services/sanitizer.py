"""Comment stripping for submitted SQL.

This is not an injection filter: it only removes ``--`` line comments and
``/* ... */`` block comments before the text reaches the driver.
"""

import re
from typing import Optional

LINE_COMMENT = re.compile(r"--.*$", re.MULTILINE)
BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)


def sanitize(sql: Optional[str]) -> str:
    """Remove SQL comments from the statement.

    Line comments are removed first, then the shortest ``/* */`` spans
    from left to right. Whitespace around removed blocks is kept; only the
    outer ends of the result are trimmed.

    Args:
        sql: The SQL statement with possible comments.

    Returns:
        The SQL statement without comments.
    """
    if sql is None:
        return ""

    sql = LINE_COMMENT.sub("", sql)
    sql = BLOCK_COMMENT.sub("", sql)
    return sql.strip()
