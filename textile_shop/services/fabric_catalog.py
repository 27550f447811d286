# textile_shop/services/fabric_catalog.py
from collections.abc import Iterable
from types import MappingProxyType

from textile_shop.core.exceptions import CatalogConfigurationError, UnknownFabricType
from textile_shop.schemas.catalog import (
    FABRIC_UNITS,
    FabricTypeDefinition,
    FabricUnit,
)


def _fabric(
    key: str,
    display_name: str,
    subtypes: Iterable[str],
    units: Iterable[str],
    default_unit: str,
) -> FabricTypeDefinition:
    return FabricTypeDefinition(
        key=key,
        display_name=display_name,
        subtypes=tuple(subtypes),
        units=tuple(units),
        default_unit=default_unit,
    )


# Storefront taxonomy. Piece-like units (piece, complet, bande, set) are sold
# as "roll"; linear units (meter, yard) as "meter".
FABRIC_TYPES: tuple[FabricTypeDefinition, ...] = (
    _fabric(
        "gabardine",
        "Gabardine",
        [f"Type {i}" for i in range(1, 13)],
        ["meter", "roll"],
        "meter",
    ),
    _fabric("bazin", "Bazin", ["Riche", "Getzner", "Super", "Doré", "Impérial"], ["meter"], "meter"),
    _fabric("soie", "Soie", ["Naturelle", "Charmeuse", "Dupion", "Satinée", "Organza"], ["meter"], "meter"),
    _fabric("velours", "Velours", ["Côtelé", "Cisélé", "Millefleurs", "De soie"], ["meter"], "meter"),
    _fabric("satin", "Satin", ["De Paris", "Duchesse", "Charme", "Coton"], ["meter"], "meter"),
    _fabric(
        "kente",
        "Kente",
        ["Adweneasa", "Sika Futuro", "Oyokoman", "Asasia", "Babadua"],
        ["roll", "meter"],
        "roll",
    ),
    _fabric("lin", "Lin", ["Naturel", "Lavé", "Mélangé", "Brodé", "Fin"], ["meter"], "meter"),
    _fabric(
        "mousseline",
        "Mousseline",
        ["De soie", "De coton", "Brodée", "Imprimée", "Légère"],
        ["meter"],
        "meter",
    ),
    _fabric(
        "pagne",
        "Pagne",
        ["Wax", "Super Wax", "Fancy", "Java", "Woodin", "Vlisco"],
        ["roll", "meter"],
        "roll",
    ),
    _fabric(
        "moustiquaire",
        "Moustiquaire",
        ["Simple", "Brodée", "Renforcée", "Colorée"],
        ["roll", "meter"],
        "roll",
    ),
    _fabric(
        "brocart",
        "Brocart",
        ["Damassé", "Jacquard", "Métallique", "Relief", "Traditionnel"],
        ["meter"],
        "meter",
    ),
    _fabric(
        "bogolan",
        "Bogolan",
        ["Traditionnel", "Moderne", "Bamanan", "Ségovien", "Minianka"],
        ["roll", "meter"],
        "roll",
    ),
    _fabric("dashiki", "Dashiki", ["Classique", "Brodé", "Angelina", "Festif", "Royal"], ["roll"], "roll"),
    _fabric("adire", "Adire", ["Eleko", "Alabere", "Oniko", "Batik", "Moderne"], ["meter"], "meter"),
    _fabric(
        "ankara",
        "Ankara",
        ["Hollandais", "Hitarget", "ABC", "Premium", "Phoenix"],
        ["meter", "roll"],
        "roll",
    ),
    _fabric(
        "shweshwe",
        "Shweshwe",
        ["Three Cats", "Da Gama", "Spruce", "Indigo", "Toto"],
        ["meter"],
        "meter",
    ),
    _fabric("aso_oke", "Aso-oke", ["Sanyan", "Alaari", "Etu", "Petuje", "Olowu"], ["roll", "meter"], "roll"),
)


class FabricCatalog:
    """
    Read-only registry of fabric types, subtypes and units.

    The table is checked once when the catalog is built:
      - keys are unique
      - subtypes and units are non-empty
      - units belong to the closed unit set
      - default_unit is one of the type's units

    After that the registry is never mutated, so lookups are safe from any
    thread without locking.
    """

    def __init__(self, definitions: Iterable[FabricTypeDefinition]):
        registry: dict[str, FabricTypeDefinition] = {}
        for definition in definitions:
            self._check_definition(definition)
            if definition.key in registry:
                raise CatalogConfigurationError(
                    f"Duplicate fabric type key: {definition.key!r}"
                )
            registry[definition.key] = definition
        self._registry = MappingProxyType(registry)

    @staticmethod
    def _check_definition(definition: FabricTypeDefinition) -> None:
        key = definition.key
        if not key:
            raise CatalogConfigurationError("Fabric type key cannot be empty")
        if not definition.subtypes:
            raise CatalogConfigurationError(f"{key}: no subtypes configured")
        if not definition.units:
            raise CatalogConfigurationError(f"{key}: no units configured")
        unknown = [u for u in definition.units if u not in FABRIC_UNITS]
        if unknown:
            raise CatalogConfigurationError(f"{key}: unsupported units {unknown}")
        if definition.default_unit not in definition.units:
            raise CatalogConfigurationError(
                f"{key}: default unit {definition.default_unit!r} "
                f"not in {list(definition.units)}"
            )

    # ----- lookups -----

    def list_types(self) -> tuple[str, ...]:
        return tuple(self._registry)

    def definitions(self) -> tuple[FabricTypeDefinition, ...]:
        return tuple(self._registry.values())

    def get_definition(self, type_key: str) -> FabricTypeDefinition:
        """
        Raises:
            UnknownFabricType: if the key is not registered.
        """
        if not self.is_valid_type(type_key):
            raise UnknownFabricType(type_key)
        return self._registry[type_key]

    def units_for(self, type_key: str) -> tuple[FabricUnit, ...]:
        return self.get_definition(type_key).units

    def subtypes_for(self, type_key: str) -> tuple[str, ...]:
        return self.get_definition(type_key).subtypes

    def default_unit_for(self, type_key: str) -> FabricUnit:
        return self.get_definition(type_key).default_unit

    def display_name_for(self, type_key: str) -> str:
        return self.get_definition(type_key).display_name

    # ----- predicates (never raise) -----

    def is_valid_type(self, candidate: object) -> bool:
        return isinstance(candidate, str) and candidate in self._registry

    def is_valid_subtype(self, type_key: object, candidate_subtype: object) -> bool:
        if not self.is_valid_type(type_key):
            return False
        return candidate_subtype in self._registry[type_key].subtypes

    def is_valid_unit(self, type_key: object, candidate_unit: object) -> bool:
        if not self.is_valid_type(type_key):
            return False
        return candidate_unit in self._registry[type_key].units

    def __contains__(self, type_key: object) -> bool:
        return self.is_valid_type(type_key)

    def __len__(self) -> int:
        return len(self._registry)


FABRIC_CATALOG = FabricCatalog(FABRIC_TYPES)
