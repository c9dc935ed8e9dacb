"""Management command that loads placeholder customers, invoices and a demo user."""
import uuid

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import connection, transaction

SEED_NAMESPACE = uuid.UUID("3958dc9e-712f-4377-85e9-fec4b6a6442a")

DEMO_USER = {"name": "User", "email": "user@nextmail.com", "password": "123456"}

CUSTOMERS = [
    ("Evil Rabbit", "evil@rabbit.com", "/customers/evil-rabbit.png"),
    ("Delba de Oliveira", "delba@oliveira.com", "/customers/delba-de-oliveira.png"),
    ("Lee Robinson", "lee@robinson.com", "/customers/lee-robinson.png"),
    ("Michael Novotny", "michael@novotny.com", "/customers/michael-novotny.png"),
    ("Amy Burns", "amy@burns.com", "/customers/amy-burns.png"),
    ("Balazs Orban", "balazs@orban.com", "/customers/balazs-orban.png"),
]

# (customer email, amount in cents, status, date)
INVOICES = [
    ("evil@rabbit.com", 15795, "pending", "2022-12-06"),
    ("delba@oliveira.com", 20348, "pending", "2022-11-14"),
    ("amy@burns.com", 3040, "paid", "2022-10-29"),
    ("michael@novotny.com", 44800, "paid", "2023-09-10"),
    ("balazs@orban.com", 34577, "pending", "2023-08-05"),
    ("lee@robinson.com", 54246, "pending", "2023-07-16"),
    ("evil@rabbit.com", 666, "pending", "2023-06-27"),
    ("michael@novotny.com", 32545, "paid", "2023-06-09"),
    ("amy@burns.com", 1250, "paid", "2023-06-17"),
    ("balazs@orban.com", 8546, "paid", "2023-06-07"),
    ("delba@oliveira.com", 500, "paid", "2023-08-19"),
    ("balazs@orban.com", 8945, "paid", "2023-06-03"),
    ("lee@robinson.com", 1000, "paid", "2022-06-05"),
]


def seed_id(*parts) -> str:
    return str(uuid.uuid5(SEED_NAMESPACE, ":".join(str(p) for p in parts)))


class Command(BaseCommand):
    help = "Load placeholder customers, invoices and the demo user"

    def handle(self, *args, **options):
        with transaction.atomic():
            self._seed_user()
            customers = self._seed_customers()
            invoices = self._seed_invoices()

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {customers} customers, {invoices} invoices and user {DEMO_USER['email']}"
        ))

    def _seed_user(self):
        User = get_user_model()
        if User.objects.filter(username=DEMO_USER["email"]).exists():
            return
        User.objects.create_user(
            username=DEMO_USER["email"],
            email=DEMO_USER["email"],
            password=DEMO_USER["password"],
            first_name=DEMO_USER["name"],
        )

    def _seed_customers(self) -> int:
        created = 0
        with connection.cursor() as cursor:
            for name, email, image_url in CUSTOMERS:
                cursor.execute(
                    """
                    INSERT INTO customers (id, name, email, image_url)
                    VALUES (%s, %s, %s, %s)
                    ON CONFLICT (id) DO NOTHING
                    """,
                    [seed_id("customer", email), name, email, image_url],
                )
                created += cursor.rowcount
        return created

    def _seed_invoices(self) -> int:
        created = 0
        with connection.cursor() as cursor:
            for index, (email, amount, status, date) in enumerate(INVOICES):
                cursor.execute(
                    """
                    INSERT INTO invoices (id, customer_id, amount, status, date)
                    VALUES (%s, %s, %s, %s, %s)
                    ON CONFLICT (id) DO NOTHING
                    """,
                    [seed_id("invoice", index), seed_id("customer", email), amount, status, date],
                )
                created += cursor.rowcount
        return created
