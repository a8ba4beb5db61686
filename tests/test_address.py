"""Tests for country-driven address formatting."""

from __future__ import annotations

import pytest

from l10ncatalog.address import (
    Address,
    AddressFormat,
    AddressFormatter,
    component_order,
    format_address,
    register_address_format,
    supported_countries,
)
from l10ncatalog.errors import UnsupportedLocale


@pytest.fixture
def formatter(registry) -> AddressFormatter:
    return AddressFormatter(registry)


class TestComponentOrder:
    """Tests for the per-country component order."""

    def test_japan_is_postal_first(self):
        assert component_order("JP") == ("postal_code", "region", "locality", "street")

    def test_united_states_is_street_first(self):
        assert component_order("US") == ("street", "locality", "region", "postal_code")

    def test_unknown_country_uses_generic_order(self):
        assert component_order("BR") == ("street", "locality", "region", "postal_code")

    def test_country_code_is_case_insensitive(self):
        assert component_order("jp") == component_order("JP")

    def test_address_order_derives_from_country(self):
        tokyo = Address("JP", "Tokyo", "Shibuya-ku", "1-2-3 Shibuya", "150-0002")
        osaka = Address("jp", "Osaka", "Kita-ku", "4-5-6 Umeda", "530-0001")
        assert tokyo.format_order == osaka.format_order == component_order("JP")
        assert tokyo.postal_first
        assert not Address("US").postal_first

    def test_builtin_countries(self):
        assert {"US", "CA", "AU", "GB", "DE", "AT", "CH", "FR", "ES", "IT", "NL",
                "TR", "JP", "CN", "KR", "RU", "SA"} <= set(supported_countries())


class TestAddressFormatter:
    """Tests for AddressFormatter.format."""

    def test_us(self, formatter):
        address = Address("US", "TX", "Austin", "123 Tech Blvd", "78701")
        result = formatter.format(address, "en")
        assert result.text == "123 Tech Blvd, Austin, TX 78701"
        assert result.verified is True
        assert result.order == ("street", "locality", "region", "postal_code")

    def test_japan(self, formatter):
        address = Address("JP", "Tokyo", "Shibuya-ku", "1-2-3 Shibuya", "150-0002")
        result = formatter.format(address, "en")
        assert result.text == "〒150-0002 Tokyo Shibuya-ku 1-2-3 Shibuya"
        assert result.order == ("postal_code", "region", "locality", "street")

    def test_germany(self, formatter):
        address = Address("DE", "Berlin", "Berlin", "Kurfürstendamm 101", "10711")
        assert formatter.format(address, "de").text == "Kurfürstendamm 101, 10711 Berlin"

    def test_united_kingdom(self, formatter):
        address = Address("GB", "England", "London", "78 Station Road", "EC1A 1BB")
        assert formatter.format(address, "en-GB").text == "78 Station Road, London, EC1A 1BB"

    def test_france(self, formatter):
        address = Address("FR", "Île-de-France", "Paris", "15 Rue de la Paix", "75002")
        assert formatter.format(address, "fr").text == "15 Rue de la Paix, 75002 Paris"

    def test_layout_does_not_depend_on_viewer_locale(self, formatter, registry):
        address = Address("JP", "東京都", "千代田区", "千代田1-1", "100-0001")
        texts = {formatter.format(address, d.code).text for d in registry}
        assert texts == {"〒100-0001 東京都 千代田区 千代田1-1"}

    def test_unknown_country_is_unverified(self, formatter):
        address = Address("BR", "SP", "São Paulo", "Rua Augusta 1500", "01304-001")
        result = formatter.format(address, "en")
        assert result.text == "Rua Augusta 1500, São Paulo, SP, 01304-001"
        assert result.verified is False
        assert result.country_code == "BR"

    def test_empty_components_are_skipped(self, formatter):
        address = Address("US", locality="Austin", street="123 Tech Blvd")
        result = formatter.format(address, "en")
        assert result.text == "123 Tech Blvd, Austin"
        assert result.order == ("street", "locality")

    def test_unsupported_locale(self, formatter):
        with pytest.raises(UnsupportedLocale):
            formatter.format(Address("US"), "xx")

    def test_global_helper(self):
        address = Address("US", "CA", "San Francisco", "200 Commerce St", "94108")
        assert str(format_address(address, "en")) == "200 Commerce St, San Francisco, CA 94108"


class TestRegisterAddressFormat:
    """Adding a country is a table row."""

    def test_register(self, formatter):
        register_address_format(
            "BR", AddressFormat((("street",), ("locality", "region"), ("postal_code",)), " - ")
        )
        try:
            address = Address("BR", "SP", "São Paulo", "Rua Augusta 1500", "01304-001")
            result = formatter.format(address, "en")
            assert result.text == "Rua Augusta 1500 - São Paulo SP - 01304-001"
            assert result.verified is True
        finally:
            from l10ncatalog import address as address_module

            address_module._ADDRESS_FORMATS.pop("BR")

    def test_register_rejects_unknown_component(self):
        with pytest.raises(ValueError):
            register_address_format("XX", AddressFormat((("street", "county"),)))
