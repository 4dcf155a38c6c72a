# Generates individual customer records

from xl9045qi.hoteldesk import data
from xl9045qi.hoteldesk.generators import r, generate_address, generate_us_phone
from xl9045qi.hoteldesk.generators import get_first_name, get_last_name


def generate_id_proof() -> str:
    code = "".join(r.choice("ABCDEFGHJKLMNPQRSTUVWXYZ0123456789") for _ in range(8))
    return r.choice(data.id_proof_templates).format(code=code)

def generate_customer() -> dict:
    """Generate the details of a random customer.

    Returns:
        dict: Keyword arguments for HDDatabase.add_customer(): name, email, phone, address, id_proof.
    """
    fname = get_first_name()
    lname = get_last_name()
    email_parts = {
        "fname": fname,
        "lname": lname,
        "f_initial": fname[0],
        "l_initial": lname[0],
        "year": str(r.randrange(70, 2030)).zfill(2),
        "domain": r.choice(data.customer_email_domains)
    }
    email_fmt = r.choice(data.customer_email_templates)
    # Faker surnames can carry apostrophes and spaces
    email = email_fmt.format(**email_parts).lower().replace(" ", "").replace("'", "")

    return {
        "name": f"{fname} {lname}",
        "email": email,
        "phone": generate_us_phone(),
        "address": generate_address(),
        "id_proof": generate_id_proof(),
    }
