import apps.goals.models
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('goals', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='goal',
            name='time_estimate',
            field=models.FloatField(default=1.0, help_text='Szacowany czas w godzinach (> 0)', validators=[apps.goals.models.validate_positive]),
        ),
    ]
