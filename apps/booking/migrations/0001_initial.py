import django.core.validators
import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('name', models.CharField(max_length=255)),
                ('course_name', models.CharField(blank=True, max_length=255)),
                ('cmid', models.PositiveIntegerField(help_text='Course module id of this booking activity (used in links)', unique=True)),
                ('intro', models.TextField(blank=True)),
            ],
            options={
                'verbose_name': 'Booking',
                'verbose_name_plural': 'Bookings',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='BookingOption',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('text', models.CharField(help_text='Title of the option', max_length=255)),
                ('description', models.TextField(blank=True, help_text='HTML description')),
                ('location', models.CharField(blank=True, max_length=255)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('institution', models.CharField(blank=True, max_length=255)),
                ('coursestarttime', models.DateTimeField(blank=True, null=True)),
                ('courseendtime', models.DateTimeField(blank=True, null=True)),
                ('maxanswers', models.PositiveIntegerField(default=0, help_text='Places available (0 = unlimited)', validators=[django.core.validators.MinValueValidator(0)])),
                ('beforebookedtext', models.TextField(blank=True)),
                ('beforecompletedtext', models.TextField(blank=True)),
                ('aftercompletedtext', models.TextField(blank=True)),
                ('booking', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='options', to='booking.booking')),
            ],
            options={
                'verbose_name': 'Booking Option',
                'verbose_name_plural': 'Booking Options',
                'ordering': ['coursestarttime', 'text'],
            },
        ),
        migrations.CreateModel(
            name='OptionDate',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('coursestarttime', models.DateTimeField(db_index=True)),
                ('courseendtime', models.DateTimeField()),
                ('option', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sessions', to='booking.bookingoption')),
            ],
            options={
                'verbose_name': 'Session',
                'verbose_name_plural': 'Sessions',
                'ordering': ['coursestarttime'],
            },
        ),
        migrations.CreateModel(
            name='SessionCustomField',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('cfgname', models.CharField(max_length=120)),
                ('value', models.TextField(blank=True)),
                ('optiondate', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='customfields', to='booking.optiondate')),
            ],
            options={
                'verbose_name': 'Session Custom Field',
                'verbose_name_plural': 'Session Custom Fields',
                'ordering': ['cfgname'],
            },
        ),
        migrations.CreateModel(
            name='BookingAnswer',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('waitinglist', models.PositiveSmallIntegerField(choices=[(0, 'Booked'), (1, 'On waiting list'), (2, 'Reserved'), (5, 'Deleted')], db_index=True, default=0)),
                ('completed', models.BooleanField(default=False)),
                ('option', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='answers', to='booking.bookingoption')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='booking_answers', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Booking Answer',
                'verbose_name_plural': 'Booking Answers',
                'ordering': ['created_at'],
                'constraints': [models.UniqueConstraint(condition=models.Q(('waitinglist', 5), _negated=True), fields=('option', 'user'), name='uq_live_answer_per_user')],
            },
        ),
    ]
