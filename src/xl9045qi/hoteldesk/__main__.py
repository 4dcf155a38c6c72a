# Run the hotel front desk console

import argparse
import logging
import os.path
import sys

from rich import print

import xl9045qi.hoteldesk.models as models
from xl9045qi.hoteldesk.config import configure_logging, load_job
from xl9045qi.hoteldesk.console import HotelConsole
from xl9045qi.hoteldesk.database import HDDatabase
from xl9045qi.hoteldesk.errors import HotelError
from xl9045qi.hoteldesk.seed import generate_demo_data, seed_sample_data

logger = logging.getLogger("xl9045qi.hoteldesk")

def main():

    print()
    print("  [bold]Hotel Desk[/]  v0.1")
    print("  Front desk management for rooms, guests, reservations, staff and billing")
    print()

    parser = argparse.ArgumentParser(description="Run the hotel front desk console")
    parser.add_argument("JOBFILE",nargs="?",default=None,help="Path to a hoteldesk YAML job file (packaged defaults if omitted)")
    parser.add_argument("--data-dir",type=str,help="Directory holding the .dat files (overrides storage.data_dir)")
    parser.add_argument("--no-sample",action="store_true",help="Do not insert sample data into an empty store")
    parser.add_argument("--demo",type=int,nargs=3,metavar=("ROOMS","CUSTOMERS","EMPLOYEES"),help="Generate random demo records before starting")

    args = parser.parse_args()

    try:
        if args.JOBFILE:
            print("Reading job: " + args.JOBFILE)
        job = load_job(args.JOBFILE)
        if args.data_dir:
            job['storage']['data_dir'] = args.data_dir
        configure_logging(job)
        models.PASSWORD_HASH_ROUNDS = job['security']['bcrypt_rounds']

        print("Data directory: " + os.path.abspath(job['storage']['data_dir']))
        db = HDDatabase(job)

        if db.is_empty() and job.get('sample_data', True) and not args.no_sample:
            print("Empty store - loading sample data...")
            seed_sample_data(db)
            print("Sample logins use the default password for [bold]robert@hotel.com[/] (admin), "
                  "[bold]lisa@hotel.com[/] and [bold]david@hotel.com[/].")

        if args.demo:
            generate_demo_data(db, *args.demo)

    except HotelError as e:
        logger.error(e.full_message())
        print(f"[bold red]ERROR:[/] {e.full_message()}")
        sys.exit(1)

    try:
        HotelConsole(db, job).run()
    except (KeyboardInterrupt, EOFError):
        print()
        print("Interrupted.")

    print("Exiting program.")

if __name__ == "__main__":
    main()
