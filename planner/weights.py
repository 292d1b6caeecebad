"""Gewichts-Normalisierung für Prüfungsleistungen (Largest-Remainder-Verfahren).

Die KI rundet Gewichte einzeln, dadurch ergibt die Summe oft 99 oder 101.
Die Normalisierung stellt exakt 100 wieder her, ohne die Reihenfolge
zu verändern.
"""

import logging
import math
from fractions import Fraction
from typing import Sequence

from config.defaults import ASSESSMENT_WEIGHT_TOLERANCE

logger = logging.getLogger(__name__)

TARGET_TOTAL = 100


def normalize_weights(weights: Sequence[int]) -> list[int]:
    """Gibt Ganzzahl-Gewichte zurück, die exakt 100 ergeben.

    - Summe schon 100 (innerhalb Toleranz): unverändert
    - Summe ≤ 0: 100 gleichmäßig verteilen, die ersten ``100 % n`` bekommen +1
    - sonst: auf 100 skalieren, abrunden, Rest nach größtem Bruchteil verteilen
      (bei Gleichstand gewinnt die frühere Position)
    """
    if not weights:
        return []

    clamped = [max(0, int(w)) for w in weights]
    total = sum(clamped)
    n = len(clamped)

    if total <= 0:
        base, extra = divmod(TARGET_TOTAL, n)
        return [base + (1 if i < extra else 0) for i in range(n)]

    if abs(total - TARGET_TOTAL) < ASSESSMENT_WEIGHT_TOLERANCE and clamped == list(weights):
        return clamped

    ideal = [Fraction(w * TARGET_TOTAL, total) for w in clamped]
    result = [math.floor(x) for x in ideal]
    shortfall = TARGET_TOTAL - sum(result)

    # sorted() ist stabil: gleiche Reste behalten die ursprüngliche Reihenfolge
    order = sorted(range(n), key=lambda i: ideal[i] - result[i], reverse=True)
    for i in order[:shortfall]:
        result[i] += 1

    logger.debug(f"Gewichte normalisiert: {list(weights)} → {result}")
    return result


def normalize_assessments(assessments: list) -> list:
    """Normalisiert die Gewichte einer Liste von Assessment-Modellen.

    Gibt neue Instanzen zurück; unveränderte Gewichte liefern dieselben Objekte.
    """
    new_weights = normalize_weights([a.weight for a in assessments])
    return [
        a if a.weight == w else a.model_copy(update={"weight": w})
        for a, w in zip(assessments, new_weights)
    ]
