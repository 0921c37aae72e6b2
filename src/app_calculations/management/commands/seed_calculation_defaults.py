import logging

from django.core.management.base import BaseCommand, CommandError
from django_tenants.utils import get_public_schema_name, get_tenant_model

from app_calculations.services import ReferenceDataService

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = (
        "Seed the system correction factors and the default norm-hours. "
        "Without --company, norm-hours are created for every non-public tenant. "
        "Existing rows are never overwritten, so the command can be run repeatedly."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--company",
            default=None,
            help="schema_name of the tenant to seed norm-hours for.",
        )

    def handle(self, *args, **opts):
        service = ReferenceDataService()
        tenant_model = get_tenant_model()

        created = service.initialize_system_defaults()
        self.stdout.write(f"Systeem-correctiefactoren: {created} aangemaakt")

        if opts["company"]:
            tenant = tenant_model.objects.filter(schema_name=opts["company"]).first()
            if tenant is None:
                raise CommandError(f"Bedrijf met schema '{opts['company']}' niet gevonden")
            tenants = [tenant]
        else:
            tenants = tenant_model.objects.exclude(schema_name=get_public_schema_name())

        for tenant in tenants:
            created = service.create_default_normuren(tenant)
            self.stdout.write(f"✓ {tenant.schema_name}: {created} normuren aangemaakt")

        logger.info("Seeding calculatie-standaarden afgerond")
        self.stdout.write(self.style.SUCCESS("✅ Seeding finished"))
