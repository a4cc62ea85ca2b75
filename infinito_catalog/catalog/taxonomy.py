"""Collection taxonomy.

Static editorial grouping of storefront collections into categories,
based on the navigation menu of infinitopiercing.com, plus Spanish display
names for known collection handles.

Adding or removing a collection is a data change only:

    Category(
        key="bisuteria",
        display_name="Bisutería",
        emoji="💍",
        collection_handles=("candongas", "topos", "solitarios"),
    )
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    """An editorial category of collections.

    Attributes:
        key: Category identifier.
        display_name: Human-readable Spanish name.
        emoji: Icon shown next to the name.
        collection_handles: Member collection handles, in authoring order.
    """

    key: str
    display_name: str
    emoji: str
    collection_handles: tuple[str, ...]


UNCATEGORIZED_KEY = "otras"
UNCATEGORIZED_NAME = "Otras Colecciones"
UNCATEGORIZED_EMOJI = "📦"


CATEGORIES: tuple[Category, ...] = (
    Category(
        key="parte-cuerpo",
        display_name="Parte del Cuerpo",
        emoji="👤",
        # intimas removed: empty upstream
        collection_handles=("oreja", "nariz", "ceja", "bucal", "corporal"),
    ),
    Category(
        key="bisuteria",
        display_name="Bisutería",
        emoji="💍",
        # anillos, collares, dijes, simuladores, tobilleras, earcuff removed: empty upstream
        collection_handles=("candongas", "topos", "solitarios"),
    ),
    Category(
        key="tipo-material",
        display_name="Tipo de Material",
        emoji="⚡",
        collection_handles=(
            "titanio-grado-implante",
            "acero",
            "titanio",
            "plata",
            "oro",
            "covergold",
        ),
    ),
    Category(
        key="tipo-joya",
        display_name="Tipo de Joya",
        emoji="💎",
        collection_handles=(
            "aro",
            "chispa-nostril",
            "labret",
            "barra-barbell",
            "herradura",
            "bcr",
            "barra-pezon-nipple",
            "banana-curved-barbell",
            "top-microdermal",
        ),
    ),
)


COLLECTION_NAMES: dict[str, str] = {
    # Body part
    "oreja": "Oreja",
    "nariz": "Nariz",
    "ceja": "Ceja",
    "ceja-1": "Ceja",
    "bucal": "Bucal",
    "corporal": "Corporal",
    "intimas": "Íntimas",
    "intimates": "Íntimas",
    # Piercing types
    "helix": "Helix",
    "helix-1": "Helix",
    "flat": "Flat",
    "conch": "Conch",
    "forward-anti-helix": "Forward Anti-helix",
    "daith": "Daith",
    "scapha": "Scapha",
    "industrial": "Industrial",
    "expansion": "Expansión",
    # Costume jewelry
    "candongas": "Candongas",
    "topos": "Topos",
    "anillos": "Anillos",
    "collares": "Collares",
    "dijes": "Dijes",
    "dijens": "Dijes",
    "solitarios": "Solitarios",
    "simuladores": "Simuladores",
    "tobilleras": "Tobilleras",
    "earcuff": "Ear Cuff",
    # Materials
    "titanio-grado-implante": "Titanio Grado Implante",
    "titanio": "Titanio",
    "acero": "Acero",
    "oro": "Oro",
    "plata": "Plata",
    "covergold": "Covergold",
    "esmeraldas": "Esmeraldas",
    # Jewelry types
    "aro": "Aro",
    "chispa-nostril": "Chispa (Nostril)",
    "labret": "Labret",
    "barra-barbell": "Barra (Barbell)",
    "barbell-barra": "Barbell",
    "herradura": "Herradura",
    "bcr": "BCR",
    "expansores": "Expansores",
    "barra-pezon-nipple": "Barra Pezón",
    "banana-curved-barbell": "Banana (Curved Barbell)",
    "top-microdermal": "Top Microdermal",
}


def categories_of() -> tuple[Category, ...]:
    """Get all categories in declaration order."""
    return CATEGORIES


def display_name_for(handle: str, fallback_title: str) -> str:
    """Get the Spanish display name of a collection.

    Args:
        handle: Collection handle.
        fallback_title: Title to use when the handle has no override.

    Returns:
        Override name if known, otherwise `fallback_title` unchanged.
    """
    if handle in COLLECTION_NAMES:
        return COLLECTION_NAMES[handle]
    return fallback_title


def all_collection_handles(
    categories: tuple[Category, ...] = CATEGORIES,
) -> list[str]:
    """Get every member handle once, in declaration order.

    Args:
        categories: Categories to read (defaults to the built-in table).

    Returns:
        List of unique collection handles.
    """
    seen: dict[str, None] = {}
    for category in categories:
        for handle in category.collection_handles:
            seen.setdefault(handle, None)
    return list(seen)
