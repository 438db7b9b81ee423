from collections import namedtuple
import re
from datetime import date, datetime, timedelta
import logging

from services.exceptions import InvalidDateError, ValidationError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

OVERDUE = "overdue"
DUE_TODAY = "due_today"
UPCOMING = "upcoming"

# state : OVERDUE, DUE_TODAY ou UPCOMING
# days : jours de retard (OVERDUE) ou jours restants (UPCOMING), 0 sinon
WateringStatus = namedtuple("WateringStatus", ["state", "days"])


def parse_date(value):
    """
    Convertit une valeur en date calendaire.
    Args:
        value: date, datetime (l'heure est ignorée) ou chaîne ISO "YYYY-MM-DD".
    Returns:
        date
    Raises:
        InvalidDateError: si la valeur n'est pas une date valide.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # strptime accepte "2023-1-5", le format exige des mois et jours sur deux chiffres
    if not isinstance(value, str) or not re.match(DATE_PATTERN, value.strip()):
        raise InvalidDateError(f"Date invalide : {value!r} (format attendu YYYY-MM-DD)")
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        raise InvalidDateError(f"Date invalide : {value!r} (format attendu YYYY-MM-DD)") from None


def format_date(value):
    return value.strftime(DATE_FORMAT) if value else None


def parse_frequency(value):
    # bool est une sous-classe de int
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"wateringFrequency doit être un entier positif : {value!r}")
    return value


def compute_next_watering(last_watered, watering_frequency):
    """Ajoute watering_frequency jours calendaires à la date du dernier arrosage."""
    last_watered = parse_date(last_watered)
    watering_frequency = parse_frequency(watering_frequency)
    return last_watered + timedelta(days=watering_frequency)


def classify_status(next_watering, today=None):
    """
    Détermine l'état de l'arrosage d'une plante à la journée près.
    Args:
        next_watering: date du prochain arrosage.
        today: date du jour (date.today() par défaut).
    Returns:
        WateringStatus
    """
    next_watering = parse_date(next_watering)
    today = parse_date(today) if today is not None else date.today()

    days_remaining = (next_watering - today).days
    if days_remaining == 0:
        return WateringStatus(DUE_TODAY, 0)
    if days_remaining > 0:
        return WateringStatus(UPCOMING, days_remaining)
    return WateringStatus(OVERDUE, -days_remaining)


def status_message(status, next_watering):
    """Texte du rappel affiché sur la page des plantes."""
    next_watering = format_date(parse_date(next_watering))
    if status.state == DUE_TODAY:
        return "Arrosez-moi aujourd'hui !"
    if status.state == UPCOMING:
        return f"Prochain arrosage dans {status.days} jour(s), le {next_watering}."
    return f"Arrosage oublié ! Le dernier rappel était prévu le {next_watering}."
