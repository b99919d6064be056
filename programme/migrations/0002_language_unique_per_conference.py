import django.db.models.functions.text
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('programme', '0001_initial'),
    ]

    operations = [
        migrations.AddConstraint(
            model_name='language',
            constraint=models.UniqueConstraint(
                django.db.models.functions.text.Lower('code'),
                models.F('conference'),
                condition=models.Q(('conference__isnull', False)),
                name='language_unique_per_conference',
            ),
        ),
    ]
