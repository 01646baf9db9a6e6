from django.db import models
from django.core.exceptions import ValidationError
from decimal import Decimal


class Coupon(models.Model):
    class CouponType(models.TextChoices):
        PERCENTAGE = "PERCENTAGE", "Percentage"
        FIXED = "FIXED", "Fixed Amount"

    code = models.CharField(
        max_length=50,
        unique=True,
        help_text="Entered by the customer or cashier. Stored upper-case.",
    )
    type = models.CharField(max_length=20, choices=CouponType.choices)
    value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Percentage (0-100) or fixed amount, depending on type.",
    )
    min_order_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="The minimum subtotal required for the coupon to apply.",
    )
    max_discount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Upper bound on the discount amount this coupon can produce.",
    )
    usage_limit = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Total number of orders this coupon may be used on. Blank for unlimited.",
    )
    usage_count = models.PositiveIntegerField(default=0, editable=False)

    starts_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Coupon"
        verbose_name_plural = "Coupons"

    def __str__(self):
        return self.code

    def save(self, *args, **kwargs):
        if self.code:
            self.code = self.code.strip().upper()
        super().save(*args, **kwargs)

    def clean(self):
        super().clean()
        if self.type == self.CouponType.PERCENTAGE and self.value is not None:
            if not (Decimal("0") <= self.value <= Decimal("100")):
                raise ValidationError({"value": "Percentage must be between 0 and 100."})
        if self.value is not None and self.value < 0:
            raise ValidationError({"value": "Value cannot be negative."})
        if self.starts_at and self.expires_at and self.starts_at > self.expires_at:
            raise ValidationError("The start date cannot be after the expiry date.")


class CouponRedemption(models.Model):
    """One row per (coupon, order); makes usage counting idempotent."""

    coupon = models.ForeignKey(Coupon, on_delete=models.CASCADE, related_name="redemptions")
    order_id = models.CharField(max_length=64)
    redeemed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["coupon", "order_id"], name="unique_coupon_redemption_per_order"),
        ]

    def __str__(self):
        return f"{self.coupon.code} -> {self.order_id}"
