from datetime import date
import logging

from flask import current_app
from flask_restx import Namespace, Resource, fields

from services.exceptions import PersistenceError, PlantNotFound, ValidationError
from services.watering_service import DATE_PATTERN, classify_status, status_message

ns = Namespace("plants", description="Suivi des plantes et rappels d'arrosage")

logger = logging.getLogger(__name__)

plant_model = ns.model("Plant", {
    "id": fields.Integer(readonly=True, description="Identifiant de la plante"),
    "name": fields.String(description="Nom de la plante"),
    "species": fields.String(description="Espèce"),
    "lastWatered": fields.String(description="Date du dernier arrosage (YYYY-MM-DD)"),
    "wateringFrequency": fields.Integer(description="Fréquence d'arrosage en jours"),
    "lightPref": fields.String(description="Exposition préférée (bright-indirect, low-light, ...)"),
    "notes": fields.String(description="Notes libres"),
    "imageUrl": fields.String(description="URL d'une image de la plante"),
    "nextWatering": fields.String(description="Date du prochain arrosage (YYYY-MM-DD)"),
})

# Schémas d'entrée : les clés inconnues sont refusées (strict=True)
plant_input_model = ns.model("PlantInput", {
    "name": fields.String(required=True, min_length=1, description="Nom de la plante"),
    "species": fields.String(description="Espèce"),
    "lastWatered": fields.String(required=True, pattern=DATE_PATTERN, description="Date du dernier arrosage (YYYY-MM-DD)"),
    "wateringFrequency": fields.Integer(required=True, min=1, description="Fréquence d'arrosage en jours"),
    "lightPref": fields.String(description="Exposition préférée"),
    "notes": fields.String(description="Notes libres"),
    "imageUrl": fields.String(description="URL d'une image de la plante"),
}, strict=True)

plant_update_model = ns.model("PlantUpdate", {
    "name": fields.String(min_length=1, description="Nom de la plante"),
    "species": fields.String(description="Espèce (chaîne vide pour effacer)"),
    "lastWatered": fields.String(pattern=DATE_PATTERN, description="Date du dernier arrosage (YYYY-MM-DD)"),
    "wateringFrequency": fields.Integer(min=1, description="Fréquence d'arrosage en jours"),
    "lightPref": fields.String(description="Exposition préférée (chaîne vide pour effacer)"),
    "notes": fields.String(description="Notes libres (chaîne vide pour effacer)"),
    "imageUrl": fields.String(description="URL d'une image (chaîne vide pour effacer)"),
    "nextWatering": fields.String(pattern=DATE_PATTERN, description="Date du prochain arrosage (YYYY-MM-DD)"),
}, strict=True)

reminder_model = ns.model("Reminder", {
    "nextWatering": fields.String(required=True, pattern=DATE_PATTERN, description="Date du prochain arrosage (YYYY-MM-DD)"),
}, strict=True)

status_model = ns.model("WateringStatus", {
    "id": fields.Integer,
    "nextWatering": fields.String,
    "status": fields.String(enum=["overdue", "due_today", "upcoming"]),
    "days": fields.Integer(description="Jours de retard ou jours restants"),
    "message": fields.String,
})


def get_store():
    return current_app.extensions["plant_store"]


@ns.errorhandler(ValidationError)
def handle_validation_error(error):
    logger.warning(f"Requête invalide : {error}")
    return {"message": str(error)}, 400


@ns.errorhandler(PlantNotFound)
def handle_plant_not_found(error):
    return {"message": "Plante non trouvée"}, 404


@ns.errorhandler(PersistenceError)
def handle_persistence_error(error):
    logger.error(f"Erreur de base de données : {error}")
    return {"message": str(error)}, 500


@ns.route("")
class PlantList(Resource):
    @ns.marshal_list_with(plant_model)
    def get(self):
        """Liste toutes les plantes."""
        return [plant.to_dict() for plant in get_store().list()], 200

    @ns.expect(plant_input_model, validate=True)
    @ns.marshal_with(plant_model, code=201)
    def post(self):
        """Ajoute une plante et calcule la date du prochain arrosage."""
        plant = get_store().create(ns.payload)
        return plant.to_dict(), 201


@ns.route("/due")
class DuePlants(Resource):
    @ns.marshal_list_with(plant_model)
    def get(self):
        """Plantes à arroser aujourd'hui ou en retard."""
        return [plant.to_dict() for plant in get_store().due(date.today())], 200


@ns.route("/<int:plant_id>")
class PlantResource(Resource):
    @ns.marshal_with(plant_model)
    def get(self, plant_id):
        return get_store().get(plant_id).to_dict(), 200

    @ns.expect(plant_update_model, validate=True)
    def put(self, plant_id):
        """
        Mise à jour partielle : seuls les champs présents sont modifiés.
        """
        get_store().update(plant_id, ns.payload or {})
        return {"message": "Plante mise à jour avec succès"}, 200

    def delete(self, plant_id):
        get_store().delete(plant_id)
        return {"message": "Plante supprimée avec succès"}, 200


@ns.route("/<int:plant_id>/reminder")
class PlantReminder(Resource):
    @ns.expect(reminder_model, validate=True)
    def put(self, plant_id):
        """Modifie uniquement la date du prochain arrosage."""
        plant = get_store().update_reminder(plant_id, ns.payload.get("nextWatering"))
        return {
            "message": "Rappel mis à jour avec succès",
            "nextWatering": plant.to_dict()["nextWatering"],
        }, 200


@ns.route("/<int:plant_id>/status")
class PlantStatus(Resource):
    @ns.marshal_with(status_model)
    def get(self, plant_id):
        plant = get_store().get(plant_id)
        data = plant.to_dict()
        if plant.next_watering is None:
            raise ValidationError(f"Aucun rappel défini pour la plante {plant_id}")
        status = classify_status(plant.next_watering, date.today())
        return {
            "id": plant.id,
            "nextWatering": data["nextWatering"],
            "status": status.state,
            "days": status.days,
            "message": status_message(status, plant.next_watering),
        }, 200
