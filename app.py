import click
from flask import Flask
from flask_restx import Api
from config import Config
import logging
import atexit
from extensions import db, migrate, cors

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Configurer le logging
    logging.basicConfig(level=app.config.get("LOG_LEVEL", "DEBUG"))
    logger.debug("Application Flask créée avec succès")

    # Initialisation des extensions
    db.init_app(app)
    logger.debug("SQLAlchemy initialisé")
    migrate.init_app(app, db)
    logger.debug("Migrate initialisé")

    allowed_origins = app.config["ALLOWED_CORS_ORIGINS"]
    cors.init_app(app, resources={r"/*": {
        "origins": allowed_origins,
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "Accept"],
        "max_age": 86400
    }})
    logger.debug(f"CORS configuré avec origines : {allowed_origins}")

    # Importation des modèles
    from models.plant import Plant  # noqa: F401
    from services.plant_service import PlantStore

    with app.app_context():
        db.create_all()
        logger.debug("Tables créées avec succès dans la base de données.")

    # Une seule instance du store par application, fermée à l'arrêt
    store = PlantStore(db)
    app.extensions["plant_store"] = store

    # En test, chaque fixture ferme son propre store
    if not app.config.get("TESTING"):
        def close_store():
            with app.app_context():
                store.close()
        atexit.register(close_store)

    api = Api(
        title="Plant Care API",
        version="1.0",
        description="API de suivi des plantes et des rappels d'arrosage",
        doc="/docs",
    )
    api.init_app(app)
    logger.debug("API Flask-RESTX initialisée")

    # Enregistrement des namespaces API
    def register_namespaces():
        from api.plant import ns as plant_ns

        api.add_namespace(plant_ns, path="/plants")

    register_namespaces()

    @app.cli.command("seed")
    def seed_command():
        """Insère les plantes d'exemple si la table est vide."""
        inserted = store.seed()
        click.echo(f"{inserted} plante(s) d'exemple insérée(s).")

    if app.config.get("REMINDER_SCHEDULER_ENABLED"):
        from services.reminder_service import start_reminder_scheduler
        start_reminder_scheduler(app)

    logger.debug("create_app terminé avec succès")
    return app


if __name__ == "__main__":
    app = create_app()
    logger.debug("Démarrage du serveur")
    app.run(host='0.0.0.0', port=app.config["PORT"], debug=True, use_reloader=False)
