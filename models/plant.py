from extensions import db
from services.watering_service import format_date


class Plant(db.Model):
    __tablename__ = 'plants'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(120), nullable=False)
    species = db.Column(db.String(120))
    last_watered = db.Column(db.Date, nullable=False)
    watering_frequency = db.Column(db.Integer, nullable=False)  # en jours
    light_pref = db.Column(db.String(50))  # ex: bright-indirect, low-light
    notes = db.Column(db.Text)
    image_url = db.Column(db.String(500))
    next_watering = db.Column(db.Date)

    __table_args__ = (
        db.CheckConstraint("watering_frequency > 0", name="check_watering_frequency_positive"),
    )

    # Clé JSON -> attribut du modèle
    FIELDS = {
        "name": "name",
        "species": "species",
        "lastWatered": "last_watered",
        "wateringFrequency": "watering_frequency",
        "lightPref": "light_pref",
        "notes": "notes",
        "imageUrl": "image_url",
        "nextWatering": "next_watering",
    }

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "species": self.species,
            "lastWatered": format_date(self.last_watered),
            "wateringFrequency": self.watering_frequency,
            "lightPref": self.light_pref,
            "notes": self.notes,
            "imageUrl": self.image_url,
            "nextWatering": format_date(self.next_watering),
        }

    def __repr__(self):
        return f"<Plant {self.id}, Name: {self.name}, Next watering: {self.next_watering}>"
