"""Domain constants for fiscal aggregation."""

INVOICE_PAID = "paid"
INVOICE_PENDING = "pending"
INVOICE_OVERDUE = "overdue"
INVOICE_CANCELED = "canceled"

INVOICE_STATUSES = (
    INVOICE_PENDING,
    INVOICE_PAID,
    INVOICE_OVERDUE,
    INVOICE_CANCELED,
)
PENDING_INVOICE_STATUSES = (INVOICE_PENDING, INVOICE_OVERDUE)

QUOTE_PENDING = "pending"
QUOTE_ACCEPTED = "accepted"
QUOTE_REJECTED = "rejected"
PENDING_QUOTE_STATUSES = (QUOTE_PENDING,)

TRANSACTION_INCOME = "income"
TRANSACTION_EXPENSE = "expense"

ALL_PERIODS = "all"
QUARTER_MONTHS = {
    "Q1": (1, 2, 3),
    "Q2": (4, 5, 6),
    "Q3": (7, 8, 9),
    "Q4": (10, 11, 12),
}

UNCATEGORIZED = "Uncategorized"

IVA_TAX_NAME = "IVA"
IRPF_TAX_NAME = "IRPF"

INVOICE_STATUS_LABELS = {
    "pending": "Pendiente",
    "paid": "Pagada",
    "overdue": "Vencida",
    "canceled": "Cancelada",
}
QUOTE_STATUS_LABELS = {
    "draft": "Borrador",
    "sent": "Enviado",
    "pending": "Pendiente",
    "accepted": "Aceptado",
    "rejected": "Rechazado",
    "expired": "Expirado",
}
TRANSACTION_TYPE_LABELS = {
    "income": "Ingreso",
    "expense": "Gasto",
}
CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
}


__all__ = [
    "INVOICE_PAID",
    "INVOICE_PENDING",
    "INVOICE_OVERDUE",
    "INVOICE_CANCELED",
    "INVOICE_STATUSES",
    "PENDING_INVOICE_STATUSES",
    "QUOTE_PENDING",
    "QUOTE_ACCEPTED",
    "QUOTE_REJECTED",
    "PENDING_QUOTE_STATUSES",
    "TRANSACTION_INCOME",
    "TRANSACTION_EXPENSE",
    "ALL_PERIODS",
    "QUARTER_MONTHS",
    "UNCATEGORIZED",
    "IVA_TAX_NAME",
    "IRPF_TAX_NAME",
    "INVOICE_STATUS_LABELS",
    "QUOTE_STATUS_LABELS",
    "TRANSACTION_TYPE_LABELS",
    "CURRENCY_SYMBOLS",
]
