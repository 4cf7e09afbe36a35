# Bundled demo dataset: a handful of San Antonio investors plus one Houston
# property that sits well outside any city-scale radius.

SEED_DOCUMENT = {
    "buyers": [
        {"id": "b1", "name": "Evergreen Residential LLC", "buyer_type": "flipper",
         "contacts": [{"phone": "210-555-0187"}]},
        {"id": "b2", "name": "Alamo Rentals Group", "buyer_type": "landlord",
         "contacts": [{"phone": "210-555-0142"}]},
        {"id": "b3", "name": "River City Capital", "buyer_type": "cash",
         "contacts": [{"phone": "210-555-0199"}]},
        {"id": "b4", "name": "Hill Country Flips", "buyer_type": "flipper",
         "contacts": [{"email": "offers@hillcountryflips.com"}]},
    ],
    "properties": [
        {"id": "p1", "addr1": "112 Blanco Rd", "city": "San Antonio", "state": "TX",
         "zip": "78212", "lat": 29.462, "lon": -98.501},
        {"id": "p2", "addr1": "2744 Briarhurst Dr #38", "city": "Houston", "state": "TX",
         "zip": "77057", "lat": 29.741, "lon": -95.483},
        {"id": "p3", "addr1": "501 Woodlawn Ave", "city": "San Antonio", "state": "TX",
         "zip": "78201", "lat": 29.458, "lon": -98.514},
        {"id": "p4", "addr1": "2803 W Martin St", "city": "San Antonio", "state": "TX",
         "zip": "78207", "lat": 29.422, "lon": -98.514},
        {"id": "p5", "addr1": "133 King William St", "city": "San Antonio", "state": "TX",
         "zip": "78204", "lat": 29.410, "lon": -98.495},
        {"id": "p6", "addr1": "845 S Presa St", "city": "San Antonio", "state": "TX",
         "zip": "78210", "lat": 29.411, "lon": -98.487},
    ],
    "events": [
        {"id": "e1", "buyer_id": "b1", "property_id": "p1", "event_type": "purchase",
         "event_date": "2025-07-21", "price": 275000, "source": "county"},
        {"id": "e2", "buyer_id": "b1", "property_id": "p3", "event_type": "purchase",
         "event_date": "2025-05-10", "price": 245000, "source": "county"},
        {"id": "e3", "buyer_id": "b1", "property_id": "p5", "event_type": "purchase",
         "event_date": "2024-12-19", "price": 310000, "source": "mls"},
        {"id": "e4", "buyer_id": "b2", "property_id": "p4", "event_type": "purchase",
         "event_date": "2025-03-02", "price": 190000, "source": "county"},
        {"id": "e5", "buyer_id": "b2", "property_id": "p6", "event_type": "purchase",
         "event_date": "2024-10-11", "price": 215000, "source": "county"},
        {"id": "e6", "buyer_id": "b3", "property_id": "p1", "event_type": "purchase",
         "event_date": "2024-09-20", "price": 260000, "source": "county"},
        {"id": "e7", "buyer_id": "b4", "property_id": "p6", "event_type": "purchase",
         "event_date": "2025-08-05", "price": 330000, "source": "mls"},
    ],
}
