import os

from yaml import safe_load

with open(os.path.dirname(__file__) + "/defaults.yaml", "r") as _f:
    _data = safe_load(_f)

# Make all keys of _data available as attributes on this module (e.g. '_data['amenities'] -> xl9045qi.hoteldesk.data.amenities')
for key, value in _data.items():
    globals()[key] = value

def room_type_band(room_type) -> dict:
    """Get the price band and standard capacity for a room type name or enum."""
    name = getattr(room_type, "value", room_type)
    return _data['room_types'][name]
