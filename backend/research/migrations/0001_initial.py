"""Research topic per student.

Generated manually. Run `python manage.py migrate` to apply.
"""
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('academics', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ResearchDetails',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=500)),
                ('abstract', models.TextField(blank=True)),
                ('supervisor_name', models.CharField(blank=True, max_length=255)),
                ('co_supervisor_name', models.CharField(blank=True, max_length=255)),
                ('keywords', models.JSONField(blank=True, default=list)),
                ('status', models.CharField(choices=[('proposal', 'Proposal'), ('in_progress', 'In progress'), ('submitted', 'Submitted'), ('completed', 'Completed')], default='proposal', max_length=16)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('student', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='research_details', to='academics.studentprofile')),
            ],
            options={'verbose_name_plural': 'Research details'},
        ),
    ]
