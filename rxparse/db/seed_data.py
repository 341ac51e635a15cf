# rxparse/db/seed_data.py
# Starter vocabulary loaded by POST /medicines/seed into empty tables.

COMMON_MEDICINES = [
    "Aconitum Napellus",
    "Allium Cepa",
    "Antimonium Tartaricum",
    "Apis Mellifica",
    "Arnica Montana",
    "Arsenicum Album",
    "Baptisia Tinctoria",
    "Belladonna",
    "Bryonia Alba",
    "Calcarea Carbonica",
    "Cantharis",
    "Carbo Vegetabilis",
    "Causticum",
    "Chamomilla",
    "China Officinalis",
    "Colocynthis",
    "Drosera Rotundifolia",
    "Eupatorium Perfoliatum",
    "Ferrum Phosphoricum",
    "Gelsemium Sempervirens",
    "Hepar Sulphuris",
    "Hypericum Perforatum",
    "Ignatia Amara",
    "Ipecacuanha",
    "Kali Bichromicum",
    "Kali Carbonicum",
    "Lachesis",
    "Ledum Palustre",
    "Lycopodium Clavatum",
    "Magnesia Phosphorica",
    "Mercurius Solubilis",
    "Natrum Muriaticum",
    "Nux Vomica",
    "Phosphorus",
    "Podophyllum Peltatum",
    "Pulsatilla Nigricans",
    "Rhus Toxicodendron",
    "Ruta Graveolens",
    "Sabadilla",
    "Sanguinaria Canadensis",
    "Sepia",
    "Silicea",
    "Spongia Tosta",
    "Sulphur",
    "Thuja Occidentalis",
    "Veratrum Album",
    "Zincum Metallicum",
]

COMMON_COMBINATIONS = [
    {"name": "BC", "content": "Bryonia + Causticum", "description": "For cough and respiratory conditions"},
    {"name": "BCR", "content": "Bryonia + Causticum + Rhus Tox", "description": "For joint pain and inflammation"},
    {"name": "ARS", "content": "Arsenicum Album + Rhus Tox + Sulphur", "description": "For skin conditions"},
    {"name": "AB", "content": "Arnica + Belladonna", "description": "For injuries and inflammation"},
    {"name": "ABC", "content": "Arnica + Belladonna + Calendula", "description": "For wounds and injuries"},
    {"name": "GHA", "content": "Gelsemium + Aconite + Bryonia", "description": "For flu and fever"},
    {"name": "RST", "content": "Rhus Tox + Sulphur + Thuja", "description": "For skin eruptions"},
    {"name": "NBS", "content": "Nux Vomica + Bryonia + Sulphur", "description": "For digestive issues"},
    {"name": "PCC", "content": "Phosphorus + Carbo Veg + China", "description": "For weakness and exhaustion"},
    {"name": "HSC", "content": "Hepar Sulph + Silicea + Calendula", "description": "For infections and abscesses"},
]
