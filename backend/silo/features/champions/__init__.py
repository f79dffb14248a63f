"""Champions feature module — title winners by competition and by year."""

from .service import ChampionRecord, is_championship, list_champions, champions_by_year, AUTO

__all__ = [
    "ChampionRecord",
    "is_championship",
    "list_champions",
    "champions_by_year",
    "AUTO",
]
