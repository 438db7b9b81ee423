from contextlib import contextmanager
import logging

from sqlalchemy.exc import SQLAlchemyError

from models.plant import Plant
from services.exceptions import PersistenceError, PlantNotFound, ValidationError
from services.watering_service import compute_next_watering, parse_date, parse_frequency

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "lastWatered", "wateringFrequency")
OPTIONAL_TEXT_FIELDS = ("species", "lightPref", "notes", "imageUrl")
CREATE_FIELDS = REQUIRED_FIELDS + OPTIONAL_TEXT_FIELDS
UPDATE_FIELDS = CREATE_FIELDS + ("nextWatering",)

# Plantes d'exemple insérées par la commande `flask seed`
SAMPLE_PLANTS = [
    {
        "name": "Pothos",
        "species": "Epipremnum aureum",
        "lastWatered": "2023-10-20",
        "wateringFrequency": 7,
        "lightPref": "bright-indirect",
        "notes": "Easy to care for, loves humidity.",
        "imageUrl": "https://upload.wikimedia.org/wikipedia/commons/thumb/e/e0/Golden_Pothos_plant_in_a_pot.jpg/800px-Golden_Pothos_plant_in_a_pot.jpg",
    },
    {
        "name": "Fiddle Leaf Fig",
        "species": "Ficus lyrata",
        "lastWatered": "2023-10-15",
        "wateringFrequency": 10,
        "lightPref": "bright-indirect",
        "notes": "Needs consistent watering, avoid drafts.",
        "imageUrl": "https://upload.wikimedia.org/wikipedia/commons/thumb/c/cf/Fiddle_Leaf_Fig_%28Ficus_lyrata%29_-_Botanical_Garden%2C_Singapore_-_2015-08-04.jpg/800px-Fiddle_Leaf_Fig_%28Ficus_lyrata%29_-_Botanical_Garden%2C_Singapore_-_2015-08-04.jpg",
    },
    {
        "name": "Snake Plant",
        "species": "Sansevieria trifasciata",
        "lastWatered": "2023-10-01",
        "wateringFrequency": 14,
        "lightPref": "low-light",
        "notes": "Very forgiving, tolerates neglect.",
        "imageUrl": "https://upload.wikimedia.org/wikipedia/commons/thumb/3/3d/Sansevieria_trifasciata_%27Laurentii%27_on_display_at_the_Conservatory_of_Flowers.jpg/800px-Sansevieria_trifasciata_%28Laurentii%29_on_display_at_the_Conservatory_of_Flowers.jpg",
    },
]


def _clean_text(key, value):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} doit être une chaîne de caractères")
    # Une chaîne vide efface le champ
    return value.strip() or None


def _clean_name(value):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("name est obligatoire et ne peut pas être vide")
    return value.strip()


def clean_fields(data, allowed):
    """
    Valide un dictionnaire de champs JSON et le convertit en attributs du modèle Plant.
    Seules les clés présentes sont retournées (mise à jour par fusion).
    """
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ValidationError(f"Champs inconnus : {', '.join(unknown)}")

    values = {}
    for key, value in data.items():
        if key == "name":
            value = _clean_name(value)
        elif key in ("lastWatered", "nextWatering"):
            if value is None:
                raise ValidationError(f"{key} ne peut pas être vide")
            value = parse_date(value)
        elif key == "wateringFrequency":
            value = parse_frequency(value)
        else:
            value = _clean_text(key, value)
        values[Plant.FIELDS[key]] = value
    return values


class PlantStore:
    """Accès aux plantes enregistrées. Chaque appel lit ou écrit directement en base."""

    def __init__(self, db):
        self.db = db

    @contextmanager
    def _transaction(self, action):
        try:
            yield self.db.session
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error(f"Erreur de base de données lors de {action} : {e}")
            raise PersistenceError(str(e)) from e

    def list(self):
        try:
            plants = Plant.query.order_by(Plant.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Erreur lors de la lecture des plantes : {e}")
            raise PersistenceError(str(e)) from e
        logger.debug(f"{len(plants)} plante(s) récupérée(s)")
        return plants

    def get(self, plant_id):
        try:
            plant = self.db.session.get(Plant, plant_id)
        except SQLAlchemyError as e:
            logger.error(f"Erreur lors de la lecture de la plante {plant_id} : {e}")
            raise PersistenceError(str(e)) from e
        if plant is None:
            logger.warning(f"Plante non trouvée : {plant_id}")
            raise PlantNotFound(plant_id)
        return plant

    def create(self, data):
        missing = [key for key in REQUIRED_FIELDS if data.get(key) in (None, "")]
        if missing:
            raise ValidationError(f"Champs obligatoires manquants : {', '.join(missing)}")

        values = clean_fields(data, CREATE_FIELDS)
        values["next_watering"] = compute_next_watering(values["last_watered"], values["watering_frequency"])
        plant = Plant(**values)
        with self._transaction("la création d'une plante") as session:
            session.add(plant)
        logger.info(f"Plante créée : {plant.id} ({plant.name}), prochain arrosage le {plant.next_watering}")
        return plant

    def update(self, plant_id, data):
        values = clean_fields(data, UPDATE_FIELDS)
        plant = self.get(plant_id)
        with self._transaction(f"la mise à jour de la plante {plant_id}"):
            for attribute, value in values.items():
                setattr(plant, attribute, value)
        logger.info(f"Plante {plant_id} mise à jour : {', '.join(values) or 'aucun champ'}")
        return plant

    def update_reminder(self, plant_id, next_watering):
        if next_watering in (None, ""):
            raise ValidationError("nextWatering est obligatoire")
        next_watering = parse_date(next_watering)
        plant = self.get(plant_id)
        with self._transaction(f"la mise à jour du rappel de la plante {plant_id}"):
            plant.next_watering = next_watering
        logger.info(f"Rappel de la plante {plant_id} fixé au {next_watering}")
        return plant

    def delete(self, plant_id):
        plant = self.get(plant_id)
        with self._transaction(f"la suppression de la plante {plant_id}") as session:
            session.delete(plant)
        logger.info(f"Plante supprimée : {plant_id}")

    def due(self, today):
        """Plantes à arroser aujourd'hui ou en retard, les plus en retard d'abord."""
        today = parse_date(today)
        try:
            return (
                Plant.query.filter(Plant.next_watering <= today)
                .order_by(Plant.next_watering, Plant.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Erreur lors de la recherche des plantes à arroser : {e}")
            raise PersistenceError(str(e)) from e

    def seed(self, samples=SAMPLE_PLANTS):
        """Insère les plantes d'exemple seulement si la table est vide. Retourne le nombre inséré."""
        try:
            count = Plant.query.count()
        except SQLAlchemyError as e:
            logger.error(f"Erreur lors du comptage des plantes : {e}")
            raise PersistenceError(str(e)) from e
        if count:
            logger.debug(f"{count} plante(s) déjà présente(s), aucune donnée d'exemple insérée.")
            return 0

        plants = []
        for sample in samples:
            values = clean_fields(sample, CREATE_FIELDS)
            values["next_watering"] = compute_next_watering(values["last_watered"], values["watering_frequency"])
            plants.append(Plant(**values))
        with self._transaction("l'insertion des données d'exemple") as session:
            session.add_all(plants)
        logger.info(f"{len(plants)} plante(s) d'exemple insérée(s).")
        return len(plants)

    def close(self):
        self.db.session.remove()
        self.db.engine.dispose()
        logger.debug("Connexion à la base de données fermée.")
