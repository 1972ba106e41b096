"""
Synthetic Data Generator for the TickTee Style storefront

Generates a watch catalog, an admin account, customers and a spread of
orders across every payment method and status.

    python manage.py seed_store --products 60 --customers 25 --orders 120
"""
import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from faker import Faker

from apps.accounts.models import Profile
from apps.accounts.roles import ADMIN
from apps.cart.cart import compute_totals
from apps.cart.models import CartItem
from apps.catalog.models import Product, MENS, WOMENS, LUXURY, SPORTS
from apps.contact.models import ContactMessage
from apps.orders.models import Order, OrderItem, COD, JAZZCASH, EASYPAISA, BANK_TRANSFER
from apps.orders.transitions import STATUSES, PENDING, AWAITING_PAYMENT, reachable_from
from apps.payments.models import PaymentReview

fake = Faker()

PRODUCT_TEMPLATES = [
    ('Chronograph', 'Seiko', MENS, 18000, 65000),
    ('Field Automatic', 'Hamilton', MENS, 45000, 120000),
    ('Diver 200M', 'Citizen', MENS, 25000, 80000),
    ('Classic Leather', 'Fossil', MENS, 12000, 35000),
    ('Rose Gold Mesh', 'Daniel Wellington', WOMENS, 15000, 40000),
    ('Petite Sterling', 'Michael Kors', WOMENS, 20000, 55000),
    ('Pearl Dial', 'Guess', WOMENS, 9000, 28000),
    ('Slim Ceramic', 'Rado', LUXURY, 150000, 450000),
    ('Moonphase', 'Tissot', LUXURY, 90000, 260000),
    ('Perpetual Heritage', 'Longines', LUXURY, 250000, 700000),
    ('G-Shock Digital', 'Casio', SPORTS, 4500, 25000),
    ('Solar Tough', 'Casio', SPORTS, 9000, 32000),
    ('Pro Trek', 'Casio', SPORTS, 30000, 75000),
    ('Triathlon', 'Timex', SPORTS, 3500, 15000),
]

VARIATIONS = ['Black', 'Silver', 'Blue', 'Gold', 'Steel', 'Edition', '']

CITIES = ['Karachi', 'Lahore', 'Islamabad', 'Rawalpindi', 'Faisalabad', 'Multan', 'Peshawar', 'Quetta']

STATUS_WEIGHTS = [10, 12, 5, 3, 15, 15, 30, 7, 3]


def pk_phone():
    return f"03{random.randint(0, 4)}{random.randint(0, 9)}{random.randint(1000000, 9999999)}"


def pk_postal_code():
    return str(random.randint(10000, 99999))


class Command(BaseCommand):
    help = "Seed the database with a Faker-backed watch catalog, customers and orders"

    def add_arguments(self, parser):
        parser.add_argument('--products', type=int, default=60)
        parser.add_argument('--customers', type=int, default=25)
        parser.add_argument('--orders', type=int, default=120)
        parser.add_argument('--admin-email', default='admin@ticktee-style.pk')
        parser.add_argument('--admin-password', default='Admin@12345')
        parser.add_argument('--clear', action='store_true', help="Delete existing store data first")
        parser.add_argument('--seed', type=int, default=None, help="Random seed for repeatable data")

    def log(self, message):
        self.stdout.write(message)

    def handle(self, *args, **options):
        if options['seed'] is not None:
            random.seed(options['seed'])
            Faker.seed(options['seed'])

        self.log("\n" + "=" * 60)
        self.log("TickTee Style Data Generator")
        self.log("=" * 60 + "\n")

        with transaction.atomic():
            if options['clear']:
                self.clear_all_data()

            admin = self.generate_admin(options['admin_email'], options['admin_password'])
            customers = self.generate_customers(options['customers'])
            products = self.generate_products(options['products'])
            orders = self.generate_orders(customers, products, options['orders'], admin)

        self.log("\n" + "=" * 60)
        self.log(self.style.SUCCESS("Data Generation Complete!"))
        self.log("=" * 60)
        self.log("\nSummary:")
        self.log(f"  - Admin: {admin.email}")
        self.log(f"  - Customers: {len(customers)}")
        self.log(f"  - Products: {len(products)}")
        self.log(f"  - Orders: {len(orders)}")
        self.log("")

    def clear_all_data(self):
        """Clear all existing store data."""
        self.log("Clearing existing data...")

        PaymentReview.objects.all().delete()
        Order.objects.all().delete()
        CartItem.objects.all().delete()
        Product.objects.all().delete()
        ContactMessage.objects.all().delete()
        get_user_model().objects.filter(is_superuser=False).delete()

        self.log("All data cleared")

    def generate_admin(self, email, password):
        User = get_user_model()
        user, created = User.objects.get_or_create(username=email, defaults={'email': email, 'is_staff': True})
        if created:
            user.set_password(password)
            user.save()
        Profile.objects.update_or_create(user=user, defaults={'full_name': 'Store Admin', 'role': ADMIN})
        self.log(f"{'Created' if created else 'Reused'} admin {email}")
        return user

    def generate_customers(self, count=25):
        """Generate customers with filled-in profiles."""
        self.log(f"Generating {count} customers...")
        User = get_user_model()
        customers = []

        for _ in range(count):
            email = fake.unique.email().lower()
            user = User.objects.create_user(username=email, email=email, password='Customer@123')
            profile = user.profile
            profile.full_name = fake.name()
            profile.phone = pk_phone()
            profile.address = fake.street_address()
            profile.city = random.choice(CITIES)
            profile.postal_code = pk_postal_code()
            profile.save()
            customers.append(user)

        self.log(f"Created {len(customers)} customers")
        return customers

    def generate_products(self, count=60):
        """Generate watches from the templates with colour variations."""
        self.log(f"Generating {count} products...")
        products = []

        while len(products) < count:
            name_base, brand, category, min_price, max_price = random.choice(PRODUCT_TEMPLATES)
            variation = random.choice(VARIATIONS)
            name = f"{name_base} {variation}".strip()
            slug = name.lower().replace(' ', '-')

            product = Product.objects.create(
                name=name,
                brand=brand,
                category=category,
                price=Decimal(random.randrange(min_price, max_price, 50)),
                description=fake.paragraph(nb_sentences=3),
                stock=random.choice([0, 2, 5, 8] + [random.randint(10, 80)] * 6),
                image_urls=[f"/media/product-images/{slug}-{i}.jpg" for i in range(1, random.randint(2, 4))],
            )
            products.append(product)

        self.log(f"Created {len(products)} products")
        return products

    def pick_status(self, method):
        """Weighted status among those an order paid this way can reach."""
        reachable = reachable_from(PENDING if method == COD else AWAITING_PAYMENT)
        statuses = [status for status in STATUSES if status in reachable]
        weights = [weight for status, weight in zip(STATUSES, STATUS_WEIGHTS) if status in reachable]
        return random.choices(statuses, weights=weights)[0]

    def generate_orders(self, customers, products, count, admin):
        """Generate orders with item snapshots; wallet orders get a transaction id."""
        self.log(f"Generating {count} orders...")
        orders = []
        if not customers or not products:
            return orders

        for _ in range(count):
            user = random.choice(customers)
            profile = user.profile
            method = random.choices([COD, JAZZCASH, EASYPAISA, BANK_TRANSFER], weights=[50, 25, 20, 5])[0]
            status = self.pick_status(method)

            lines = [(product, random.randint(1, 2)) for product in random.sample(products, random.randint(1, 3))]
            subtotal = sum((product.price * quantity for product, quantity in lines), Decimal('0'))
            totals = compute_totals(subtotal, method)

            order = Order.objects.create(
                user=user,
                subtotal=totals.subtotal,
                tax=totals.tax,
                shipping_fee=totals.shipping_fee,
                cod_fee=totals.cod_fee,
                total_amount=totals.total,
                status=status,
                payment_method=method,
                transaction_id=fake.bothify('??########').upper() if method != COD else None,
                payment_verified=status in ('payment_verified', 'processing', 'shipped', 'delivered') and method != COD,
                shipping_address={
                    'fullName': profile.full_name,
                    'phone': profile.phone,
                    'streetAddress': profile.address,
                    'city': profile.city,
                    'postalCode': profile.postal_code,
                    'country': profile.country,
                },
            )
            # Spread orders over the last 60 days
            Order.objects.filter(pk=order.pk).update(
                created_at=timezone.now() - timedelta(days=random.randint(0, 60), hours=random.randint(0, 23))
            )

            for product, quantity in lines:
                OrderItem.objects.create(
                    order=order,
                    product=product,
                    quantity=quantity,
                    price=product.price,
                    product_name=product.name,
                )

            if status == 'payment_rejected':
                PaymentReview.objects.create(
                    order=order, reviewer=admin, decision='rejected', notes='Transaction not found in wallet statement'
                )
            orders.append(order)

        self.log(f"Created {len(orders)} orders")
        return orders
