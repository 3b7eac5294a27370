from __future__ import annotations

import pytest
from sqlalchemy import Text, UniqueConstraint

from db.models import ListItem, PlaylistItem, WatchlistItem


@pytest.mark.parametrize("model", [WatchlistItem, ListItem, PlaylistItem])
@pytest.mark.parametrize("column", ["release_date", "first_air_date"])
def test_date_columns_accept_free_text_of_any_length(model: type, column: str) -> None:
    column_type = model.__table__.c[column].type

    assert isinstance(column_type, Text)
    assert column_type.length is None


@pytest.mark.parametrize("model", [WatchlistItem, ListItem, PlaylistItem])
def test_entry_is_unique_per_owner_and_media(model: type) -> None:
    unique_columns = {
        tuple(column.name for column in constraint.columns)
        for constraint in model.__table__.constraints
        if isinstance(constraint, UniqueConstraint)
    }

    assert any({"tmdb_id", "media_type"} <= set(columns) for columns in unique_columns)
