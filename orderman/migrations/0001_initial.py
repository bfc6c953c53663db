import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Outlet",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("public_id", models.PositiveIntegerField(unique=True, verbose_name="ID público")),
                ("name", models.CharField(blank=True, default="", max_length=128, verbose_name="nome")),
                ("is_active", models.BooleanField(default=True, verbose_name="ativo")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="criado em")),
            ],
            options={
                "verbose_name": "loja",
                "verbose_name_plural": "lojas",
                "ordering": ("public_id",),
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("public_id__gt", 0)),
                        name="outlet_public_id_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_number", models.CharField(max_length=64, unique=True, verbose_name="número do pedido")),
                (
                    "format",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("sequential", "sequencial"),
                            ("date-based", "por data"),
                            ("random", "aleatório"),
                            ("random-numeric", "aleatório numérico"),
                            ("compact-numeric", "compacto numérico"),
                            ("hybrid", "híbrido"),
                        ],
                        default="",
                        max_length=32,
                        verbose_name="formato",
                    ),
                ),
                ("sequence", models.PositiveIntegerField(default=0, verbose_name="sequência")),
                ("meta", models.JSONField(blank=True, default=dict, verbose_name="metadados")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="criado em")),
                (
                    "outlet",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="orderman.outlet",
                        verbose_name="loja",
                    ),
                ),
            ],
            options={
                "verbose_name": "pedido",
                "verbose_name_plural": "pedidos",
                "ordering": ("-created_at", "-id"),
            },
        ),
    ]
