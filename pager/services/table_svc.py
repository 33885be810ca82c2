from __future__ import annotations

from typing import List

import pandas as pd

from ..domain.models import User

HEADERS = ["ID", "Name", "Age", "Country", "Degree", "Status", "Site"]


def users_frame(users: List[User]) -> pd.DataFrame:
    rows = [
        [u.id, u.name, u.age, u.country, u.degree or "", u.status or "", u.site or ""]
        for u in users
    ]
    return pd.DataFrame(rows, columns=HEADERS)


def render_users(users: List[User]) -> str:
    """Plain-text table of users; header only when there is nothing to show."""
    if not users:
        return "  ".join(HEADERS) + "\n"
    df = users_frame(users)
    with pd.option_context("display.max_rows", None, "display.width", 160, "display.max_colwidth", 80):
        return df.to_string(index=False) + "\n"
