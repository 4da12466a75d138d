#!/usr/bin/env python3
"""Seed a sample coffee catalog and default branding.

Usage:
  python3 scripts/seed_catalog.py [--with-admin]

Products that already exist (same name) are skipped, so the script can be
run repeatedly.
"""
import sys
from pathlib import Path
import argparse

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roaster.db import SessionLocal, Base, engine
from roaster import crud, schemas
from roaster.config.settings import settings
from roaster.models import BrandingSettings, Product, ProductCategory

SAMPLE_PRODUCTS = [
    dict(name="House Blend", description="Balanced medium roast for drip and batch brew",
         category=ProductCategory.WHOLE_BEANS, price=42.0, unit="5 lb bag",
         bean_origin="Colombia / Brazil", roast_level="Medium",
         flavor_profile=["chocolate", "caramel"], production_weight_per_unit=5.0),
    dict(name="Ethiopia Yirgacheffe", description="Washed single origin, light roast",
         category=ProductCategory.WHOLE_BEANS, price=58.0, unit="5 lb bag",
         bean_origin="Ethiopia", roast_level="Light", processing_method="Washed",
         flavor_profile=["jasmine", "lemon", "bergamot"], production_weight_per_unit=5.0),
    dict(name="Espresso Classico", description="Dark, syrupy espresso blend",
         category=ProductCategory.ESPRESSO, price=46.0, unit="5 lb bag",
         roast_level="Dark", flavor_profile=["cocoa", "molasses"], production_weight_per_unit=5.0),
    dict(name="Retail 12oz House Blend", description="Retail shelf bag",
         category=ProductCategory.RETAIL_PACKS, price=9.5, unit="12 oz bag",
         roast_level="Medium", production_weight_per_unit=0.75),
    dict(name="Paper Filters #4", description="Box of 100 cone filters",
         category=ProductCategory.ACCESSORIES, price=4.0, unit="box",
         production_weight_per_unit=1.0, production_unit="box"),
]


def main():
    parser = argparse.ArgumentParser(description='Seed the sample catalog')
    parser.add_argument("--with-admin", action="store_true", help="also create the ADMIN_EMAIL account")
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        created = 0
        for data in SAMPLE_PRODUCTS:
            if db.query(Product).filter(Product.name == data["name"]).first():
                continue
            db.add(Product(**data))
            created += 1
        db.commit()
        print(f"{created} products created")

        if db.query(BrandingSettings).first() is None:
            crud.update_branding(db, schemas.BrandingUpdate(**crud.DEFAULT_BRANDING))
            print("Default branding saved")

        if args.with_admin:
            crud.ensure_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
            print(f"Admin ready: {settings.ADMIN_EMAIL}")


if __name__ == '__main__':
    main()
