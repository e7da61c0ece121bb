from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class CoreBackendConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core_backend"

    def ready(self):
        """
        Load billing settings once at startup so a bad POS_* value fails the
        boot instead of the first request.
        """
        from settings.config import app_settings

        tax_policy = app_settings.get_tax_policy()
        logger.info("Billing configuration: tax_rate=%s currency=%s", tax_policy.rate, tax_policy.currency)
