from django.db import models

# ── Lookup / Enum helpers ────────────────────────────────────────────────

class Cycle(models.TextChoices):
    Q1    = "q1",    "1º Trimestre"
    Q2    = "q2",    "2º Trimestre"
    Q3    = "q3",    "3º Trimestre"
    Q4    = "q4",    "4º Trimestre"
    ANUAL = "anual", "Anual"

class Frequency(models.TextChoices):
    MENSAL     = "mensal",     "Mensal"
    TRIMESTRAL = "trimestral", "Trimestral"
    SEMESTRAL  = "semestral",  "Semestral"
    ANUAL      = "anual",      "Anual"

class AccumulationMethod(models.TextChoices):
    SUM        = "sum",        "Soma"
    AVERAGE    = "average",    "Média"
    LAST_VALUE = "last_value", "Último valor"
    MANUAL     = "manual",     "Manual"

class MetricType(models.TextChoices):
    NUMBER     = "number",     "Número"
    INTEGER    = "integer",    "Inteiro"
    PERCENTAGE = "percentage", "Percentual"
    CURRENCY   = "currency",   "Moeda"
    BOOLEAN    = "boolean",    "Sim/Não"

class ScoreZone(models.TextChoices):
    EXCEEDED  = "superou",   "Superou"
    ON_TARGET = "no_alvo",   "No alvo"
    AT_RISK   = "em_risco",  "Em risco"
    ZEROED    = "zerado",    "Zerado"
    NO_DATA   = "sem_dados", "Sem dados"


QUARTERS = (Cycle.Q1, Cycle.Q2, Cycle.Q3, Cycle.Q4)
