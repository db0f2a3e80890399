"""MongoDB validation schema for community reports."""

REPORT_TYPES = ("flood", "deforestation")

REPORT_SCHEMA = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["id", "location", "type", "description", "createdAt"],
        "properties": {
            "_id": {"bsonType": "objectId"},
            "id": {"bsonType": "string"},
            "location": {"bsonType": "string"},
            "type": {"enum": list(REPORT_TYPES)},
            "description": {"bsonType": "string"},
            "lat": {"bsonType": ["double", "null"], "minimum": -90.0, "maximum": 90.0},
            "lng": {"bsonType": ["double", "null"], "minimum": -180.0, "maximum": 180.0},
            "imageUrl": {"bsonType": "string"},
            "createdAt": {"bsonType": "date"},
        }
    }
}


def create_collections_with_validation(db):
    existing = db.list_collection_names()
    if "reports" not in existing:
        db.create_collection("reports", validator=REPORT_SCHEMA)
    else:
        db.command("collMod", "reports", validator=REPORT_SCHEMA)
