"""Meat shop database management CLI.

Creates or drops the SQL tables of the catalogue and ordering domains.
Domains configured with the memory provider are skipped.

Usage:
    python src/manage.py setup-db
    python src/manage.py drop-db --domain ordering
"""

import argparse


def _domains():
    from catalogue.domain import catalogue
    from ordering.domain import ordering

    return {"catalogue": catalogue, "ordering": ordering}


def run(action, names=None):
    from ordering.utils.db import drop_db, setup_db

    schema_fn = setup_db if action == "setup-db" else drop_db
    domains = _domains()

    for name in names or list(domains):
        domain = domains[name]
        domain.init()
        print(f"{'Creating' if action == 'setup-db' else 'Dropping'} {name} schema...")
        schema_fn(domain)

    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Meat shop database management")
    parser.add_argument("command", choices=["setup-db", "drop-db"])
    parser.add_argument(
        "--domain",
        choices=["catalogue", "ordering"],
        nargs="*",
        help="Specific domain(s) to act on (default: all)",
    )

    args = parser.parse_args(argv)
    run(args.command, args.domain)


if __name__ == "__main__":
    main()
