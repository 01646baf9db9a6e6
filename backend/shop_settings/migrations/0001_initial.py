from decimal import Decimal
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ShopSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('shop_name', models.CharField(default='My Shop', max_length=100)),
                ('address', models.TextField(blank=True, help_text='Printed under the shop name, one line per row')),
                ('phone', models.CharField(blank=True, max_length=30)),
                ('vat_number', models.CharField(blank=True, max_length=50)),
                ('tax_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Tax rate as a percentage (e.g., 10 for 10%)', max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('currency', models.CharField(default='USD', help_text='Three-letter currency code (ISO 4217)', max_length=3)),
                ('currency_symbol', models.CharField(default='$', max_length=5)),
                ('receipt_footer', models.TextField(blank=True, default='Thank you for your business!')),
                ('logo', models.ImageField(blank=True, null=True, upload_to='receipt_logos/')),
                ('receipt_qr_url', models.URLField(blank=True, help_text='Printed as a QR code at the bottom of receipts')),
                ('receipt_line_width', models.PositiveSmallIntegerField(default=32, help_text='Characters per line on receipt printers without their own width', validators=[django.core.validators.MinValueValidator(16), django.core.validators.MaxValueValidator(64)])),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Shop Settings',
                'verbose_name_plural': 'Shop Settings',
            },
        ),
        migrations.CreateModel(
            name='Printer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text="Display name (e.g., 'Front Counter')", max_length=100, unique=True)),
                ('role', models.CharField(choices=[('receipt', 'Receipt Printer'), ('kitchen', 'Kitchen Printer')], max_length=20)),
                ('backend', models.CharField(choices=[('simulated', 'Simulated (log only)'), ('usb', 'USB'), ('network', 'Network (raw TCP)'), ('spooler', 'System print queue'), ('plugin', 'Embedded print plugin')], default='simulated', max_length=20)),
                ('ip_address', models.GenericIPAddressField(blank=True, null=True)),
                ('port', models.PositiveIntegerField(default=9100)),
                ('usb_vendor_id', models.PositiveIntegerField(blank=True, null=True)),
                ('usb_product_id', models.PositiveIntegerField(blank=True, null=True)),
                ('queue_name', models.CharField(blank=True, max_length=200)),
                ('plugin_url', models.URLField(blank=True)),
                ('line_width', models.PositiveSmallIntegerField(blank=True, help_text="Characters per line; defaults to the shop's receipt line width", null=True, validators=[django.core.validators.MinValueValidator(16), django.core.validators.MaxValueValidator(64)])),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['role', 'name'],
                'indexes': [models.Index(fields=['role', 'is_active'], name='printer_role_active_idx')],
            },
        ),
    ]
