import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('users', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='PrivateMessage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('content', models.TextField()),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('is_read', models.BooleanField(default=False)),
                ('receiver', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='received_private_messages', to='users.user')),
                ('sender', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sent_private_messages', to='users.user')),
            ],
            options={
                'db_table': 'private_messages',
                'ordering': ['created_at', 'id'],
                'indexes': [
                    models.Index(fields=['sender', 'receiver', 'created_at'], name='pm_pair_created_idx'),
                    models.Index(fields=['receiver', 'is_read'], name='pm_receiver_unread_idx'),
                ],
            },
        ),
    ]
