# Generated manually for orders app

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('members', '0001_initial'),
        ('weeks', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('description', models.CharField(max_length=500)),
                ('total_amount', models.DecimalField(decimal_places=2, help_text='Sum of undiscounted line prices', max_digits=14)),
                ('discount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('final_amount', models.DecimalField(decimal_places=2, help_text='Negotiated payable total', max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('order_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('week', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='weeks.week')),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-order_date', '-created_at'],
                'indexes': [models.Index(fields=['week', 'order_date'], name='orders_week_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('line_number', models.PositiveIntegerField(default=0)),
                ('item_name', models.CharField(max_length=200)),
                ('price', models.DecimalField(decimal_places=2, max_digits=14)),
                ('discount_share', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('final_price', models.DecimalField(decimal_places=2, max_digits=14)),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='order_items', to='members.member')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='orders.order')),
            ],
            options={
                'db_table': 'order_items',
                'ordering': ['order', 'line_number'],
                'indexes': [models.Index(fields=['member'], name='order_items_member_idx')],
            },
        ),
    ]
