from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CacheEntry",
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
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=250, unique=True)),
                ("data", models.TextField(blank=True, default="")),
                (
                    "expires",
                    models.DateTimeField(blank=True, db_index=True, null=True),
                ),
            ],
            options={
                "verbose_name_plural": "cache entries",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ModuleSetting",
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
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("module", models.CharField(db_index=True, max_length=128)),
                ("key", models.CharField(max_length=128)),
                ("value", models.TextField(blank=True, default="")),
            ],
            options={
                "ordering": ["module", "key"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("module", "key"),
                        name="uniq_module_setting_module_key",
                    )
                ],
            },
        ),
    ]
