class PlantCareError(Exception):
    """Erreur de base du suivi des plantes."""


class ValidationError(PlantCareError):
    """Donnée d'entrée manquante ou invalide (HTTP 400)."""


class InvalidDateError(ValidationError):
    """Date mal formée, le format attendu est YYYY-MM-DD."""


class PlantNotFound(PlantCareError):
    def __init__(self, plant_id):
        super().__init__(f"Plante introuvable : {plant_id}")
        self.plant_id = plant_id


class PersistenceError(PlantCareError):
    """Échec de la base de données, le message du pilote est conservé."""
