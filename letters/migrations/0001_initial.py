from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Setting",
            fields=[
                (
                    "key",
                    models.CharField(max_length=64, primary_key=True, serialize=False),
                ),
                ("value", models.CharField(max_length=255)),
            ],
            options={
                "db_table": "settings",
            },
        ),
        migrations.CreateModel(
            name="Letter",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("content", models.TextField()),
                ("origin", models.CharField(db_column="ip_address", max_length=64)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("reply_text", models.TextField(blank=True, null=True)),
                ("reply_created_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "db_table": "letters",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["origin", "created_at"],
                        name="letters_origin_created_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("reply_created_at__isnull", True),
                                ("reply_text__isnull", True),
                            ),
                            models.Q(
                                ("reply_created_at__isnull", False),
                                ("reply_text__isnull", False),
                            ),
                            _connector="OR",
                        ),
                        name="letters_reply_pair_consistent",
                    )
                ],
            },
        ),
    ]
