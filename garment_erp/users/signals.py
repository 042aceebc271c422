import logging

from django.db.models.signals import post_save
from django.dispatch import receiver
from rolepermissions.roles import assign_role

from garment_erp.users.models import User

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def assign_owner_role_to_superuser(sender, instance, created, **kwargs):
    """Superusers created from the CLI become workshop owners."""
    if created and instance.is_superuser:
        assign_role(instance, 'owner')
        logger.info(f"Assigned owner role to superuser {instance.email}")
