# rxparse/services/llm/prescription_schema.py
# Wire contract of the AI parse: camelCase keys, every field required.

_STRING_FIELDS = (
    "medicineName",
    "potency",
    "quantity",
    "doseForm",
    "dosePerIntake",
    "frequency",
    "pattern",
    "duration",
)

RX_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        **{name: {"type": "string"} for name in _STRING_FIELDS},
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
    },
    "required": [*_STRING_FIELDS, "confidence"],
}

# wire key -> StructuredPrescription attribute
WIRE_FIELDS = {
    "medicineName": "medicine_name",
    "potency": "potency",
    "quantity": "quantity",
    "doseForm": "dose_form",
    "dosePerIntake": "dose_per_intake",
    "frequency": "frequency",
    "pattern": "pattern",
    "duration": "duration",
}
