"""Instructions and response schema for receipt extraction."""

EXTRACTION_INSTRUCTION = """Analyze the receipt image or text and extract the following information as JSON:
- The vendor or store name.
- The transaction date in YYYY-MM-DD format.
- The total amount of the transaction as a number.
- The currency symbol or code (e.g. $, MXN, USD).
- A suggested category for the expense (e.g. Meals, Transport, Lodging, Other).

If any information is not available, leave it as an empty string, or 0 for the amount.
Make sure the result is only the JSON object."""

PDF_PREAMBLE = "This file is a PDF; treat it as an image."

XML_PREAMBLE = "Analyze the following XML content of an invoice and extract the required information."

# Fixed response shape requested from the generation endpoint
EXTRACTION_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "vendor": {"type": "string"},
        "date": {"type": "string"},
        "totalAmount": {"type": "number"},
        "currency": {"type": "string"},
        "category": {"type": "string"},
    },
    "required": ["vendor", "date", "totalAmount", "currency", "category"],
}


def pdf_instruction() -> str:
    return f"{PDF_PREAMBLE} {EXTRACTION_INSTRUCTION}"


def xml_instruction(xml_text: str) -> str:
    return f"{XML_PREAMBLE}\n\n{xml_text}\n\n{EXTRACTION_INSTRUCTION}"
