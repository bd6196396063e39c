import pytest

from app.core.pair_key import canonical_pair


def test_order_independent():
    assert canonical_pair(7, 3) == canonical_pair(3, 7) == (3, 7)


def test_rejects_same_user():
    with pytest.raises(ValueError):
        canonical_pair(4, 4)
