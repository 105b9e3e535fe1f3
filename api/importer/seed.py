"""
Fixed first-run content used by `service.seed_once()`.
"""

from __future__ import annotations

from catalog.schemas import NewEntrega, NewTrack

SEED_CREATED_AT = "2024-01-01T00:00:00Z"

SEED_ENTREGA = NewEntrega(name="Entrega 001", batch_id=None, created_at=SEED_CREATED_AT)


def seed_tracks(entrega_id: int) -> list[NewTrack]:
    """
    Tracks of the seed entrega, all pointing at `entrega_id` and at no album.
    """
    rows = [
        ("A1", "Sombra Lenta", "Los Sigilosos", 312, 118.0, "Am", "🔥🔥🔥"),
        ("A2", "Marea Baja", "Cinta Azul", 285, 122.5, "Dm", "🔥🔥"),
        ("B1", "Ruido Blanco", "Quinta Planta", 401, 126.0, "F#m", "🔥🔥🔥🔥"),
        ("B2", "Niebla", "Los Sigilosos", 257, 110.0, "C", "🔥"),
    ]
    return [
        NewTrack(
            title=title,
            artist_name=artist_name,
            album_id=None,
            duration_seconds=duration_seconds,
            bpm=bpm,
            tone=tone,
            position=position,
            score=score,
            entrega_id=entrega_id,
            created_at=SEED_CREATED_AT,
        )
        for (position, title, artist_name, duration_seconds, bpm, tone, score) in rows
    ]
