"""Country-specific postal address formatting.

The layout of an address is a pure function of its country: every address
from Japan renders postal-code-first and largest-to-smallest, every address
from the United States renders street-first, no matter which locale the
viewer reads the catalog in. Only the labels around an address are
translated.

Each country is one row of the format table. A row lists groups of
components; components inside a group are joined by a space and groups by
the row's separator. Countries without a row use a generic order and the
result is flagged as unverified.

Usage:
    from l10ncatalog.address import Address, AddressFormatter

    formatter = AddressFormatter()
    address = Address("JP", region="Tokyo", locality="Shibuya-ku",
                      street="1-2-3 Shibuya", postal_code="150-0002")
    formatter.format(address, "en").text
    # "〒150-0002 Tokyo Shibuya-ku 1-2-3 Shibuya"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from l10ncatalog.locales import LocaleRegistry, get_locale_registry
from l10ncatalog.protocols import FormattedAddress

logger = logging.getLogger(__name__)


STREET = "street"
LOCALITY = "locality"
REGION = "region"
POSTAL_CODE = "postal_code"

COMPONENTS: tuple[str, ...] = (STREET, LOCALITY, REGION, POSTAL_CODE)


@dataclass(frozen=True)
class Address:
    """A structured postal address.

    The display order is not part of the address: it is looked up from the
    country table through ``format_order``.
    """
    country_code: str
    region: str = ""
    locality: str = ""
    street: str = ""
    postal_code: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "country_code", self.country_code.strip().upper())

    @property
    def format_order(self) -> tuple[str, ...]:
        """Component names in display order for this address's country."""
        return component_order(self.country_code)

    @property
    def postal_first(self) -> bool:
        order = self.format_order
        return bool(order) and order[0] == POSTAL_CODE

    def component(self, name: str) -> str:
        if name not in COMPONENTS:
            raise KeyError(f"Unknown address component: {name!r}")
        return getattr(self, name)


@dataclass(frozen=True)
class AddressFormat:
    """One row of the country format table.

    Attributes:
        groups: Ordered groups of component names
        separator: Text placed between groups
        postal_prefix: Marker written before the postal code (e.g., "〒")
    """
    groups: tuple[tuple[str, ...], ...]
    separator: str = ", "
    postal_prefix: str = ""

    @property
    def order(self) -> tuple[str, ...]:
        return tuple(name for group in self.groups for name in group)

    @property
    def postal_first(self) -> bool:
        return self.order[:1] == (POSTAL_CODE,)


GENERIC_FORMAT = AddressFormat(((STREET,), (LOCALITY,), (REGION,), (POSTAL_CODE,)))

_STREET_CITY_REGION_POSTAL = AddressFormat(((STREET,), (LOCALITY,), (REGION, POSTAL_CODE)))
_STREET_POSTAL_CITY = AddressFormat(((STREET,), (POSTAL_CODE, LOCALITY)))
_STREET_POSTAL_CITY_REGION = AddressFormat(((STREET,), (POSTAL_CODE, LOCALITY), (REGION,)))

_ADDRESS_FORMATS: dict[str, AddressFormat] = {
    "US": _STREET_CITY_REGION_POSTAL,
    "CA": _STREET_CITY_REGION_POSTAL,
    "AU": AddressFormat(((STREET,), (LOCALITY, REGION, POSTAL_CODE))),
    "GB": AddressFormat(((STREET,), (LOCALITY,), (POSTAL_CODE,))),
    "DE": _STREET_POSTAL_CITY,
    "AT": _STREET_POSTAL_CITY,
    "CH": _STREET_POSTAL_CITY,
    "FR": _STREET_POSTAL_CITY,
    "NL": _STREET_POSTAL_CITY,
    "ES": _STREET_POSTAL_CITY_REGION,
    "TR": _STREET_POSTAL_CITY_REGION,
    "IT": AddressFormat(((STREET,), (POSTAL_CODE, LOCALITY, REGION))),
    "JP": AddressFormat(
        ((POSTAL_CODE,), (REGION,), (LOCALITY,), (STREET,)),
        separator=" ",
        postal_prefix="〒",
    ),
    "CN": AddressFormat(((POSTAL_CODE,), (REGION,), (LOCALITY,), (STREET,)), separator=" "),
    "KR": AddressFormat(((REGION,), (LOCALITY,), (STREET,), (POSTAL_CODE,)), separator=" "),
    "RU": AddressFormat(((STREET,), (LOCALITY,), (REGION,), (POSTAL_CODE,))),
    "SA": AddressFormat(((STREET,), (LOCALITY, POSTAL_CODE), (REGION,))),
}


def register_address_format(country_code: str, address_format: AddressFormat) -> None:
    """Add or replace a country row."""
    unknown = set(address_format.order) - set(COMPONENTS)
    if unknown:
        raise ValueError(f"Unknown address components: {sorted(unknown)}")
    _ADDRESS_FORMATS[country_code.strip().upper()] = address_format


def get_address_format(country_code: str) -> AddressFormat | None:
    return _ADDRESS_FORMATS.get(country_code.strip().upper())


def component_order(country_code: str) -> tuple[str, ...]:
    """Component names in display order for a country.

    Countries without a row get the generic order.
    """
    address_format = get_address_format(country_code)
    return (address_format or GENERIC_FORMAT).order


def supported_countries() -> list[str]:
    return sorted(_ADDRESS_FORMATS)


class AddressFormatter:
    """Formats addresses using the country table.

    The viewer locale is validated but does not change the layout.
    """

    def __init__(self, registry: LocaleRegistry | None = None) -> None:
        self._registry = registry or get_locale_registry()

    def format(self, address: Address, locale: str) -> FormattedAddress:
        """Format an address.

        Raises:
            UnsupportedLocale: If the locale is not registered.
        """
        self._registry.require(locale)

        address_format = get_address_format(address.country_code)
        verified = address_format is not None
        if address_format is None:
            logger.debug(
                f"No address format for country {address.country_code!r}; using generic order"
            )
            address_format = GENERIC_FORMAT

        groups: list[str] = []
        emitted: list[str] = []
        for group in address_format.groups:
            parts: list[str] = []
            for name in group:
                value = address.component(name).strip()
                if not value:
                    continue
                if name == POSTAL_CODE and address_format.postal_prefix:
                    value = f"{address_format.postal_prefix}{value}"
                parts.append(value)
                emitted.append(name)
            if parts:
                groups.append(" ".join(parts))

        return FormattedAddress(
            text=address_format.separator.join(groups),
            country_code=address.country_code,
            verified=verified,
            order=tuple(emitted),
        )


_formatter: AddressFormatter | None = None


def format_address(address: Address, locale: str) -> FormattedAddress:
    """Format an address with the global formatter."""
    global _formatter
    if _formatter is None:
        _formatter = AddressFormatter()
    return _formatter.format(address, locale)
