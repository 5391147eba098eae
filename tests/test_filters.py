import pytest

from ns1api import filters
from ns1api.filters import Filter


@pytest.mark.parametrize(
    "factory, expected_type",
    [
        (filters.new_shuffle, "shuffle"),
        (filters.new_sel_first_region, "select_first_n"),
        (filters.new_geotarget_country, "geotarget_country"),
        (filters.new_geotarget_latlong, "geotarget_latlong"),
        (filters.new_geotarget_regional, "geotarget_regional"),
        (filters.new_up, "up"),
        (filters.new_priority, "priority"),
        (filters.new_weighted_shuffle, "weighted_shuffle"),
    ],
)
def test_filters_without_config(factory, expected_type):
    fil = factory()
    assert fil.filter_type == expected_type
    assert fil.config == {}
    assert fil.disabled is False


@pytest.mark.parametrize(
    "factory, expected_type, key",
    [
        (filters.new_sticky_region, "sticky_region", "sticky_by_network"),
        (filters.new_geofence_country, "geofence_country", "remove_no_location"),
        (filters.new_geofence_regional, "geofence_regional", "remove_no_georegion"),
        (filters.new_sticky, "sticky", "sticky_by_network"),
        (filters.new_weighted_sticky, "weighted_sticky", "sticky_by_network"),
        (filters.new_netfence_asn, "netfence_asn", "remove_no_asn"),
        (filters.new_netfence_prefix, "netfence_prefix", "remove_no_ip_prefixes"),
    ],
)
@pytest.mark.parametrize("flag", [True, False])
def test_filters_with_flag(factory, expected_type, key, flag):
    fil = factory(flag)
    assert fil.filter_type == expected_type
    assert fil.config == {key: flag}


def test_select_first_n():
    fil = filters.new_sel_first_n(1)
    assert fil.filter_type == "select_first_n"
    assert fil.config == {"N": 1}


def test_ipv4_prefix_shuffle():
    fil = filters.new_ipv4_prefix_shuffle(3)
    assert fil.filter_type == "ipv4_prefix_shuffle"
    assert fil.config == {"N": 3}


def test_shed_load():
    fil = filters.new_shed_load("connections")
    assert fil.filter_type == "shed_load"
    assert fil.config == {"metric": "connections"}


def test_enable_and_disable():
    fil = filters.new_up()
    fil.disable()
    assert fil.disabled is True
    fil.enable()
    assert fil.disabled is False


def test_to_dict_omits_disabled_when_enabled():
    assert filters.new_sel_first_n(1).to_dict() == {"filter": "select_first_n", "config": {"N": 1}}


def test_to_dict_includes_disabled_when_set():
    fil = filters.new_up()
    fil.disable()
    assert fil.to_dict()["disabled"] is True


@pytest.mark.parametrize(
    "fil",
    [filters.new_sticky(True), filters.new_shed_load("loadavg"), filters.new_weighted_shuffle()],
)
def test_round_trip(fil):
    fil.disable()
    assert Filter.from_dict(fil.to_dict()) == fil


def test_from_dict_null_config():
    fil = Filter.from_dict({"filter": "up", "config": None})
    assert fil == filters.new_up()


def test_from_dict_rejects_non_mapping():
    with pytest.raises(TypeError):
        Filter.from_dict("up")