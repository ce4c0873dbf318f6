from django.db import models, transaction
from django.db.models import Q
from django.contrib.auth.models import AbstractUser


class CustomUser(AbstractUser):
    ROLE_CHOICES = (
        ('user', 'Renter'),
        ('host', 'Parking Spot Host'),
        ('admin', 'Administrator'),
    )

    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='user')
    email = models.EmailField(unique=True)
    email_verified = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    @property
    def is_host(self):
        return self.role == 'host'


class Vehicle(models.Model):
    """A renter's registered vehicle"""
    VEHICLE_TYPE_CHOICES = (
        ('car', 'Car'),
        ('bike', 'Bike'),
        ('truck', 'Truck'),
        ('suv', 'SUV'),
        ('other', 'Other'),
    )

    owner = models.ForeignKey(CustomUser, on_delete=models.CASCADE, related_name='vehicles')
    name = models.CharField(max_length=100)
    number = models.CharField(max_length=20, db_index=True)
    vehicle_type = models.CharField(max_length=10, choices=VEHICLE_TYPE_CHOICES, default='car')
    is_default = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-is_default', '-created_at']
        constraints = [
            models.UniqueConstraint(fields=['owner', 'number'], name='unique_vehicle_number_per_owner'),
            models.UniqueConstraint(
                fields=['owner'],
                condition=Q(is_default=True),
                name='single_default_vehicle_per_owner',
            ),
        ]

    def __str__(self):
        return f"{self.owner.username} - {self.number}"

    def save(self, *args, **kwargs):
        self.name = self.name.strip()
        self.number = self.number.strip().upper()

        # First vehicle of an owner is always the default one
        if self._state.adding and not Vehicle.objects.filter(owner=self.owner).exists():
            self.is_default = True

        with transaction.atomic():
            if self.is_default:
                Vehicle.objects.filter(owner=self.owner, is_default=True).exclude(pk=self.pk).update(is_default=False)
            super().save(*args, **kwargs)
