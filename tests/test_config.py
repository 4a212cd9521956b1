"""
Tests for settings and identifier ranges.
"""
import pytest

from edge_nat.core.config import IdRange, Settings


def test_default_nat_id_range():
    settings = Settings(_env_file=None)
    nat_range = settings.id_range("nat")

    assert nat_range == IdRange(minimum=65537, maximum=131072)


def test_firewall_and_nat_ranges_do_not_overlap():
    settings = Settings(_env_file=None)
    firewall = settings.id_range("firewall")
    nat = settings.id_range("NAT")

    assert firewall.maximum < nat.minimum


def test_nat_id_range_from_environment(monkeypatch):
    monkeypatch.setenv("NAT_RULE_ID_MIN", "200")
    monkeypatch.setenv("NAT_RULE_ID_MAX", "300")
    settings = Settings(_env_file=None)

    assert settings.id_range("nat") == IdRange(minimum=200, maximum=300)


def test_unknown_service_range():
    with pytest.raises(ValueError, match="Unknown service"):
        Settings(_env_file=None).id_range("load_balancer")


def test_id_range_membership():
    id_range = IdRange(minimum=10, maximum=12)

    assert 10 in id_range
    assert 12 in id_range
    assert 13 not in id_range
    assert 9 not in id_range

