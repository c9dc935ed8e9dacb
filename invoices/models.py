"""
Schema for the invoices and customers tables.

These models exist so migrations create and version the tables and the admin
can browse them. Application reads and writes go through the SQL in data.py.
"""
import uuid

from django.db import models


def _new_id():
    return str(uuid.uuid4())


class Customer(models.Model):
    id = models.CharField(primary_key=True, max_length=36, default=_new_id, editable=False)
    name = models.CharField(max_length=255)
    email = models.EmailField()
    image_url = models.CharField(max_length=255, blank=True)

    class Meta:
        db_table = "customers"
        ordering = ['name']

    def __str__(self):
        return self.name


class Invoice(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        PAID = "paid", "Paid"

    id = models.CharField(primary_key=True, max_length=36, default=_new_id, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name="invoices")
    amount = models.PositiveIntegerField(help_text="Amount in cents")
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING, db_index=True)
    date = models.DateField()

    class Meta:
        db_table = "invoices"
        ordering = ['-date']
        constraints = [
            models.CheckConstraint(condition=models.Q(amount__gt=0), name="invoice_amount_positive"),
            models.CheckConstraint(condition=models.Q(status__in=["pending", "paid"]), name="invoice_status_valid"),
        ]

    def __str__(self):
        return f"{self.id} - {self.customer_id}"
