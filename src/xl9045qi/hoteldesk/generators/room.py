# Generates individual room records

from xl9045qi.hoteldesk import data
from xl9045qi.hoteldesk.generators import r, bounded_normal as rand
from xl9045qi.hoteldesk.models import RoomType

# Relative frequency of each room type in a generated hotel
ROOM_TYPE_WEIGHTS = {
    RoomType.STANDARD: 0.55,
    RoomType.DELUXE: 0.30,
    RoomType.SUITE: 0.12,
    RoomType.PRESIDENTIAL: 0.03,
}

def generate_room(room_type: RoomType = None) -> dict:
    """Generate the details of a random room.

    Args:
        room_type (RoomType, optional): Type of room to generate. If None, a type is picked using ROOM_TYPE_WEIGHTS.

    Returns:
        dict: Keyword arguments for HDDatabase.add_room(): room_type, price, capacity, features.

    Remarks:
        The price is drawn from a normal distribution centered on the middle of the
        type's price band and clamped to the band, then rounded to whole dollars.
    """
    if room_type is None:
        room_type = r.choices(list(ROOM_TYPE_WEIGHTS.keys()), weights=list(ROOM_TYPE_WEIGHTS.values()))[0]
    else:
        room_type = RoomType(room_type)

    band = data.room_type_band(room_type)
    mean = (band['min_price'] + band['max_price']) / 2
    sd = (band['max_price'] - band['min_price']) / 4
    price = round(rand(mean, sd, band['min_price'], band['max_price']))

    # Better rooms get more amenities
    base_features = ["WiFi", "TV", "AC"]
    extra_count = {
        RoomType.STANDARD: 1,
        RoomType.DELUXE: 3,
        RoomType.SUITE: 5,
        RoomType.PRESIDENTIAL: 8,
    }[room_type]
    extras = [a for a in data.amenities if a not in base_features]
    features = base_features + r.sample(extras, min(extra_count, len(extras)))

    return {
        "room_type": room_type,
        "price": float(price),
        "capacity": r.randint(max(1, band['capacity'] - 1), band['capacity']),
        "features": features,
    }
