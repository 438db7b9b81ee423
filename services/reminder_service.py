from datetime import date
import atexit
import logging

from apscheduler.schedulers.background import BackgroundScheduler

from services.watering_service import OVERDUE, classify_status, status_message

logger = logging.getLogger(__name__)


def check_due_plants(app, today=None):
    """Journalise un rappel pour chaque plante à arroser aujourd'hui ou en retard."""
    today = today or date.today()
    with app.app_context():
        store = app.extensions["plant_store"]
        plants = store.due(today)
        for plant in plants:
            status = classify_status(plant.next_watering, today)
            message = status_message(status, plant.next_watering)
            if status.state == OVERDUE:
                logger.warning(f"Plante {plant.id} ({plant.name}) : {message}")
            else:
                logger.info(f"Plante {plant.id} ({plant.name}) : {message}")
        logger.debug(f"Vérification des rappels terminée : {len(plants)} plante(s) à arroser.")
        return plants


def start_reminder_scheduler(app):
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        check_due_plants,
        'interval',
        args=[app],
        minutes=app.config["REMINDER_INTERVAL_MINUTES"],
        id="watering_reminders",
    )
    scheduler.start()
    logger.debug("Scheduler des rappels d'arrosage démarré avec succès.")

    def shutdown_scheduler():
        if scheduler.running:
            scheduler.shutdown()
            logger.debug("Scheduler arrêté avec succès.")
    atexit.register(shutdown_scheduler)
    return scheduler
