import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='ScoreHistoryEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('goal_id', models.PositiveBigIntegerField(unique=True)),
                ('goal_name', models.CharField(max_length=200)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('score', models.FloatField()),
                ('date', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'verbose_name_plural': 'score history entries',
                'ordering': ['date', 'id'],
            },
        ),
    ]
