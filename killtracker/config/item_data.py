"""
RuneScape game data tables.

Golden beam messages are shown for several kinds of rare drop, so only the
item names below count as a boss pet drop. Names are stored lowercase.
"""

from typing import FrozenSet


PET_ITEM_NAMES: FrozenSet[str] = frozenset(
    {
        # God Wars Dungeon and classic bosses
        "king black dragon scale",
        "kalphite egg",
        "shrivelled dagannoth claw",
        "dagannoth egg",
        "dagannoth scale",
        "ribs of chaos",
        "rotten fang",
        "giant feather",
        "auburn lock",
        "decaying tooth",
        "severed hoof",
        "blood-soaked feather",
        "blood tentacle",
        "corporeal bone",
        "volcanic shard",
        "queen black dragon scale",
        "kalphite claw",

        # Legiones
        "corrupted ascension signet i",
        "corrupted ascension signet ii",
        "corrupted ascension signet iii",
        "corrupted ascension signet iv",
        "corrupted ascension signet v",
        "corrupted ascension signet vi",

        # Elite bosses
        "ancient summoning stone",
        "ancient artefact",
        "araxyte egg",
        "durzag's helmet",
        "yakamaru's helmet",
        "faceless mask",
        "twisted antler",
        "avaryss' braid",
        "nymora's braid",
        "imbued blade slice",
        "glimmering scale",
        "telos' tendril",
        "soul fragment",
        "imbued bark shard",
        "chipped black stone crystal",
        "inert black stone crystal",
        "umbral urn",
        "broken shackle",
        "pristine bagrada rex egg",
        "pristine pavosaurus rex egg",
        "pristine corbicula rex egg",
        "kerapac's mask piece",
        "glacor core",
        "croesus's enriched root",
        "tzkal-zuk's armour piece",
        "jewels of zamorak",
        "hermod's armour spike",
        "miso's collar",
        "vorkath's claw",
        "calcified heart",
        "clawdia's shell clippings",
        "nefthys' tooth",
        "fragment of the gate",
        "amascut's promise",
        "snowverload's nose",
        "mhekarnahz's eye",
    }
)


def is_pet_item(item_name: str) -> bool:
    """Check if an item name is a tracked pet drop (case-insensitive, trimmed)."""
    return item_name.strip().lower() in PET_ITEM_NAMES
