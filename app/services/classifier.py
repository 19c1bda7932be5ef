"""Split fetched records by whether the viewer owns them."""

from collections.abc import Iterable

from app.models.property import PropertyRecord


def classify(
    records: Iterable[PropertyRecord],
    viewer: str,
) -> tuple[list[PropertyRecord], list[PropertyRecord]]:
    """Stable partition into (owned, not_owned).

    Ownership is exact string equality between ``record.owner`` and ``viewer``;
    identities are compared as the ledger reports them, without normalization.
    """
    owned: list[PropertyRecord] = []
    not_owned: list[PropertyRecord] = []
    for record in records:
        if record.owner == viewer:
            owned.append(record)
        else:
            not_owned.append(record)
    return owned, not_owned
