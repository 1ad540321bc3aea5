#!/usr/bin/env python3
"""
Seed the storefront database with the launch catalog

Inserts the starting categories, products and shipping methods, and
creates a back-office admin account. Rows that already exist are left
alone, so the script can be re-run safely.

Usage:
    export DATABASE_URL="postgresql://..."
    python3 scripts/seed_catalog.py --admin-email admin@rodelas.com --admin-password 'change-me-now'
    python3 scripts/seed_catalog.py --dry-run
"""
import os
import sys
import argparse

from dotenv import load_dotenv
load_dotenv()

from psycopg2.extras import Json

from storefront.core.auth import hash_password
from storefront.core.database import get_db_connection_dict_with_retry


CATEGORIES = [
    {'id': 'three-piece', 'name': 'Three-Piece'},
    {'id': 'hijab', 'name': 'Hijab'},
    {'id': 'bedsheet', 'name': 'Bedsheet'},
]

PRODUCTS = [
    {
        'name': 'Elegant Floral Three-Piece',
        'description': 'A beautifully crafted three-piece suit with an elegant floral design. Made from '
                       'high-quality fabric for a comfortable and stylish fit, perfect for any occasion.',
        'price': 3200, 'category': 'three-piece', 'stock': 10, 'image_hint': 'floral dress',
    },
    {
        'name': 'Modern Silk Three-Piece',
        'description': 'Experience luxury with our modern silk three-piece. The smooth texture and '
                       'contemporary design make it a standout choice for formal events and celebrations.',
        'price': 4500, 'category': 'three-piece', 'stock': 5, 'image_hint': 'silk dress',
    },
    {
        'name': 'Classic Cotton Three-Piece',
        'description': 'Our classic cotton three-piece offers timeless style and unbeatable comfort. Ideal '
                       'for daily wear, it combines traditional aesthetics with modern tailoring.',
        'price': 2800, 'category': 'three-piece', 'stock': 15, 'image_hint': 'cotton dress',
    },
    {
        'name': 'Chic Summer Three-Piece',
        'description': 'Stay cool and chic with our summer collection. This lightweight and breathable '
                       'three-piece is perfect for warm weather, featuring a vibrant and breezy design.',
        'price': 3800, 'category': 'three-piece', 'stock': 8, 'image_hint': 'summer dress',
    },
    {
        'name': 'Premium Silk Hijab',
        'description': 'Drape yourself in elegance with our premium silk hijab. Its soft, lustrous finish '
                       'adds a touch of sophistication to any outfit.',
        'price': 1200, 'category': 'hijab', 'stock': 0, 'image_hint': 'silk hijab',
    },
    {
        'name': 'Soft Cotton Hijab',
        'description': 'Comfortable and versatile, our soft cotton hijab is a wardrobe essential. Available '
                       'in a variety of colors to match your style.',
        'price': 800, 'category': 'hijab', 'stock': 20, 'image_hint': 'cotton hijab',
    },
    {
        'name': 'Georgette Patterned Hijab',
        'description': 'Make a statement with this beautiful georgette hijab, featuring a unique pattern '
                       'that adds a fashionable touch to your look.',
        'price': 950, 'category': 'hijab', 'stock': 12, 'image_hint': 'patterned hijab',
    },
    {
        'name': 'Luxury King Size Bedsheet',
        'description': "Transform your bedroom into a sanctuary with our luxury king-size bedsheet set. "
                       "Made from premium materials for a soft and comfortable night's sleep.",
        'price': 5500, 'category': 'bedsheet', 'stock': 7, 'image_hint': 'luxury bedsheet',
    },
    {
        'name': 'Floral Print Bedsheet',
        'description': 'Brighten up your bedroom with our beautiful floral print bedsheet. The vibrant '
                       'design and soft fabric create a cheerful and inviting atmosphere.',
        'price': 3500, 'category': 'bedsheet', 'stock': 9, 'image_hint': 'floral bedsheet',
    },
]

SHIPPING_METHODS = [
    {'name': 'Inside Rajshahi', 'cost': 60, 'estimated_time': '24-48 hours'},
    {'name': 'Outside Rajshahi', 'cost': 120, 'estimated_time': '3-5 business days'},
]


def seed_categories(cursor, dry_run: bool = False) -> int:
    inserted = 0
    for category in CATEGORIES:
        if dry_run:
            print(f"   Would insert category {category['id']}")
            continue
        cursor.execute("""
            INSERT INTO categories (id, name, created_at, updated_at)
            VALUES (%s, %s, NOW(), NOW())
            ON CONFLICT (id) DO NOTHING
        """, (category['id'], category['name']))
        inserted += cursor.rowcount
    return inserted


def seed_products(cursor, dry_run: bool = False) -> int:
    inserted = 0
    for product in PRODUCTS:
        cursor.execute("SELECT id FROM products WHERE name = %s", (product['name'],))
        if cursor.fetchone():
            continue
        if dry_run:
            print(f"   Would insert product {product['name']}")
            continue
        cursor.execute("""
            INSERT INTO products (
                name, description, price, stock, category, image_hint, gallery_images,
                created_at, updated_at
            ) VALUES (%s, %s, %s, %s, %s, %s, %s, NOW(), NOW())
        """, (
            product['name'], product['description'], product['price'], product['stock'],
            product['category'], product['image_hint'], Json([])
        ))
        inserted += 1
    return inserted


def seed_shipping_methods(cursor, dry_run: bool = False) -> int:
    inserted = 0
    for method in SHIPPING_METHODS:
        cursor.execute("SELECT id FROM shipping_methods WHERE name = %s", (method['name'],))
        if cursor.fetchone():
            continue
        if dry_run:
            print(f"   Would insert shipping method {method['name']}")
            continue
        cursor.execute("""
            INSERT INTO shipping_methods (name, cost, estimated_time, status, created_at, updated_at)
            VALUES (%s, %s, %s, 'active', NOW(), NOW())
        """, (method['name'], method['cost'], method['estimated_time']))
        inserted += 1
    return inserted


def seed_admin(cursor, email: str, password: str, dry_run: bool = False) -> bool:
    cursor.execute("SELECT id FROM users WHERE LOWER(email) = LOWER(%s)", (email,))
    if cursor.fetchone():
        return False
    if dry_run:
        print(f"   Would create admin {email}")
        return False
    cursor.execute("""
        INSERT INTO users (email, name, role, password_hash, is_active, created_at, updated_at)
        VALUES (%s, %s, 'admin', %s, TRUE, NOW(), NOW())
    """, (email, 'Administrator', hash_password(password)))
    return True


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(description='Seed the storefront catalog and admin account')
    parser.add_argument('--dry-run', action='store_true', help='Show what would be inserted without making changes')
    parser.add_argument('--admin-email', default=os.getenv('ADMIN_EMAIL'), help='Admin account email')
    parser.add_argument('--admin-password', default=os.getenv('ADMIN_PASSWORD'), help='Admin account password')
    args = parser.parse_args()

    print("=" * 60)
    print("Seeding storefront catalog")
    print("=" * 60)

    if args.dry_run:
        print("\nDRY RUN MODE - No changes will be made to database\n")

    conn = get_db_connection_dict_with_retry()
    cursor = conn.cursor()

    try:
        print(f"Categories inserted: {seed_categories(cursor, args.dry_run)}")
        print(f"Products inserted: {seed_products(cursor, args.dry_run)}")
        print(f"Shipping methods inserted: {seed_shipping_methods(cursor, args.dry_run)}")

        if args.admin_email and args.admin_password:
            created = seed_admin(cursor, args.admin_email, args.admin_password, args.dry_run)
            print(f"Admin account {'created' if created else 'unchanged'}: {args.admin_email}")
        else:
            print("No admin credentials given, skipping admin account")

        if not args.dry_run:
            conn.commit()
            print("\nChanges committed to database")

    except Exception as e:
        conn.rollback()
        print(f"\nERROR: {e}")
        sys.exit(1)

    finally:
        cursor.close()
        conn.close()


if __name__ == "__main__":
    main()
