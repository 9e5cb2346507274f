"""Tests for the Destination/Gateway column parser."""

import ipaddress
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from errors import (
    DestinationParseError,
    IPv4ComponentCountError,
    IPv4ComponentError,
    MacAddressParseError,
)
from models import CidrEntity, DefaultEntity, LinkEntity, MacEntity
from parsers.destination import (
    parse_destination,
    parse_ipv4_shorthand,
    parse_mac_address,
    parse_simple_destination,
)


def net(text: str):
    return ipaddress.ip_network(text)


class TestIPv4Shorthand:

    def test_one_part(self):
        assert parse_ipv4_shorthand("10").network == net("0.0.0.10/32")

    def test_two_parts(self):
        assert parse_ipv4_shorthand("10.1").network == net("10.0.0.1/32")

    def test_three_parts(self):
        assert parse_ipv4_shorthand("10.1.2").network == net("10.1.0.2/32")

    def test_dotted_quad(self):
        e = parse_ipv4_shorthand("192.168.1.1")
        assert e.network == net("192.168.1.1/32")
        assert e.is_host

    def test_five_parts(self):
        with pytest.raises(IPv4ComponentCountError) as exc:
            parse_ipv4_shorthand("10.1.2.3.4")
        assert exc.value.count == 5
        assert exc.value.token == "10.1.2.3.4"

    def test_not_a_number(self):
        with pytest.raises(IPv4ComponentError) as exc:
            parse_ipv4_shorthand("How")
        assert exc.value.token == "How"

    def test_component_too_big(self):
        with pytest.raises(IPv4ComponentError):
            parse_ipv4_shorthand("10.256")

    def test_sign_not_allowed(self):
        with pytest.raises(IPv4ComponentError):
            parse_ipv4_shorthand("+10")


class TestSimpleDestination:

    def test_default(self):
        assert isinstance(parse_simple_destination("default"), DefaultEntity)

    def test_cidr(self):
        e = parse_simple_destination("10.1.0.0/16")
        assert isinstance(e, CidrEntity)
        assert e.prefix_length == 16

    def test_short_cidr(self):
        assert parse_simple_destination("224.0.0/4").network == net("224.0.0.0/4")
        assert parse_simple_destination("10/8").network == net("10.0.0.0/8")

    def test_ipv6_cidr(self):
        assert parse_simple_destination("ff00::/8").network == net("ff00::/8")

    def test_bad_cidr(self):
        with pytest.raises(DestinationParseError) as exc:
            parse_simple_destination("10.0.0.1/99")
        assert exc.value.cause is not None

    def test_bare_number(self):
        assert parse_simple_destination("127").network == net("0.0.0.127/32")

    def test_ipv6_host(self):
        e = parse_simple_destination("::1")
        assert e.network == net("::1/128")

    def test_mac(self):
        e = parse_simple_destination("a0:63:91:e5:5e:f7")
        assert isinstance(e, MacEntity)
        assert e.address == bytes.fromhex("a06391e55ef7")

    def test_mac_without_leading_zeros(self):
        e = parse_simple_destination("1:0:5e:0:0:fb")
        assert isinstance(e, MacEntity)
        assert str(e) == "01:00:5e:00:00:fb"

    def test_dotted_mac(self):
        e = parse_simple_destination("1.0.5e.0.0.1")
        assert isinstance(e, MacEntity)
        assert e.address == bytes([1, 0, 0x5e, 0, 0, 1])

    def test_dots_that_are_neither(self):
        with pytest.raises(MacAddressParseError) as exc:
            parse_simple_destination("How.now")
        assert exc.value.token == "How.now"

    def test_colons_that_are_neither(self):
        with pytest.raises(MacAddressParseError):
            parse_simple_destination("zz:yy")


class TestDestination:

    def test_link(self):
        d = parse_destination("link#6")
        assert d.entity == LinkEntity("link#6")
        assert d.zone is None

    def test_zoned_host(self):
        d = parse_destination("fe80::1%lo0")
        assert d.entity.network == net("fe80::1/128")
        assert d.zone == "lo0"

    def test_zoned_network(self):
        d = parse_destination("fe80::%utun0/64")
        assert d.entity.network == net("fe80::/64")
        assert d.zone == "utun0"

    def test_zoned_bad_address(self):
        with pytest.raises(DestinationParseError):
            parse_destination("fe80:::zz%lo0")

    def test_zoned_empty_prefix_length(self):
        with pytest.raises(DestinationParseError):
            parse_destination("fe80::%lo0/")

    def test_plain_token_has_no_zone(self):
        d = parse_destination("192.168.1.1")
        assert d.zone is None
        assert d.entity.network == net("192.168.1.1/32")


class TestMacAddress:

    def test_dash_separated(self):
        assert parse_mac_address("a0-63-91-e5-5e-f7") == bytes.fromhex("a06391e55ef7")

    def test_wrong_group_count(self):
        with pytest.raises(MacAddressParseError):
            parse_mac_address("a0:63:91")

    def test_bad_hex(self):
        with pytest.raises(MacAddressParseError):
            parse_mac_address("a0:63:91:e5:5e:g7")
