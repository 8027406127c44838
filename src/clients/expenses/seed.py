"""Demo expense records used to populate a fresh review session."""

from .schemas import ExpenseRecord, ExpenseStatus, ReceiptFile

_SEED_ROWS = [
    # id, employee, trip, vendor, date, amount, category, (file name, MIME type), status
    ("1", "Juan Pérez", "Visita Cliente Monterrey", "Restaurante La Capital", "2024-05-10", 850.50,
     "Meals", ("comida.jpg", "image/jpeg"), ExpenseStatus.PENDING),
    ("2", "Ana García", "Conferencia CDMX", "Hotel Marriott Reforma", "2024-05-12", 4500.00,
     "Lodging", ("hotel.pdf", "application/pdf"), ExpenseStatus.PENDING),
    ("3", "Juan Pérez", "Visita Cliente Monterrey", "Uber", "2024-05-10", 230.00,
     "Transport", ("uber.png", "image/png"), ExpenseStatus.PENDING),
    ("4", "Maria Rodriguez", "Capacitación Guadalajara", "Office Depot", "2024-05-15", 420.00,
     "Other", ("materiales.xml", "application/xml"), ExpenseStatus.PENDING),
    ("5", "Ana García", "Conferencia CDMX", "Volaris", "2024-05-11", 2800.00,
     "Transport", ("vuelo.pdf", "application/pdf"), ExpenseStatus.APPROVED),
    ("6", "Juan Pérez", "Visita Cliente Monterrey", "Cinepolis", "2024-05-10", 350.00,
     "Other", ("cine.jpg", "image/jpeg"), ExpenseStatus.REJECTED),
]


def seed_expenses() -> list[ExpenseRecord]:
    """Fresh copies of the demo records (receipts carry no content)."""
    return [
        ExpenseRecord(
            id=expense_id,
            employee_name=employee,
            trip_name=trip,
            vendor=vendor,
            date=date,
            amount=amount,
            currency="MXN",
            category=category,
            receipt_file=ReceiptFile(name=file_name, mime_type=mime_type, content=""),
            status=status,
        )
        for expense_id, employee, trip, vendor, date, amount, category, (file_name, mime_type), status in _SEED_ROWS
    ]
