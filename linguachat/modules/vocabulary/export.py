import csv
import io
from typing import Iterable

from linguachat.modules.vocabulary.models import Favorite

CSV_HEADER = ["word", "translation", "date"]


def favorites_to_csv(favorites: Iterable[Favorite]) -> str:
    """Export favorites as CSV, every field quoted, one row per favorite."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for fav in favorites:
        writer.writerow([fav.word, fav.translation, fav.added_at.date().isoformat()])
    return buffer.getvalue()
