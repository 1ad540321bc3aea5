"""
Unit tests for the dashboard, customer and invoice views over orders
"""
from unittest.mock import MagicMock
from datetime import date
from decimal import Decimal

from storefront.services.customer_service import summarize_customers, CustomerService
from storefront.services.dashboard_service import build_dashboard, monthly_revenue, DashboardService
from storefront.services.invoice_service import build_invoice


class TestMonthlyRevenue:

    def test_twelve_months_oldest_first(self):
        series = monthly_revenue([], today=date(2025, 3, 15))

        assert len(series) == 12
        assert series[0]['month'] == '2024-04'
        assert series[-1]['month'] == '2025-03'

    def test_buckets_revenue_and_skips_cancelled(self, make_order):
        orders = [
            make_order(id=1, order_date=date(2025, 3, 2), total=Decimal('1000')),
            make_order(id=2, order_date=date(2025, 3, 20), total=Decimal('500')),
            make_order(id=3, order_date=date(2025, 2, 5), total=Decimal('700'), status='cancelled'),
            make_order(id=4, order_date=date(2023, 1, 1), total=Decimal('900')),
        ]

        series = monthly_revenue(orders, today=date(2025, 3, 31))

        assert series[-1] == {'month': '2025-03', 'revenue': 1500.0, 'orders': 2}
        assert series[-2] == {'month': '2025-02', 'revenue': 0.0, 'orders': 0}


class TestBuildDashboard:

    def test_totals(self, make_order, make_product):
        orders = [
            make_order(id=3, status='pending', total=Decimal('1000')),
            make_order(id=2, status='delivered', total=Decimal('3000')),
            make_order(id=1, status='cancelled', total=Decimal('5000')),
        ]
        products = [
            make_product(id=1, stock=10),
            make_product(id=2, stock=0),
            make_product(id=3, stock=2),
            make_product(id=4, stock=5),
        ]

        dashboard = build_dashboard(orders, products, today=date(2025, 3, 31))

        totals = dashboard['totals']
        assert totals['revenue'] == 4000.0
        assert totals['orders'] == 3
        assert totals['pending_orders'] == 1
        assert totals['average_order_value'] == 2000.0
        assert totals['products'] == 4
        assert totals['out_of_stock'] == 1
        assert totals['low_stock'] == 2
        assert totals['units_in_stock'] == 17

        assert dashboard['orders_by_status'] == {
            'pending': 1, 'processing': 0, 'shipped': 0, 'delivered': 1, 'cancelled': 1
        }
        assert [p['id'] for p in dashboard['low_stock_products']] == [3, 4]
        assert [o['id'] for o in dashboard['recent_orders']] == [3, 2, 1]

    def test_empty_store(self):
        dashboard = build_dashboard([], [], today=date(2025, 3, 31))

        assert dashboard['totals']['revenue'] == 0.0
        assert dashboard['totals']['average_order_value'] == 0.0
        assert dashboard['recent_orders'] == []

    def test_recent_orders_limited_to_five(self, make_order):
        orders = [make_order(id=i) for i in range(8, 0, -1)]

        dashboard = build_dashboard(orders, [], today=date(2025, 3, 31))

        assert [o['id'] for o in dashboard['recent_orders']] == [8, 7, 6, 5, 4]

    def test_service_reads_all_orders_and_products(self, make_order, make_product):
        order_repo, product_repo = MagicMock(), MagicMock()
        order_repo.list_all.return_value = [make_order()]
        product_repo.list_all.return_value = [make_product()]

        dashboard = DashboardService(order_repo, product_repo).get_dashboard(today=date(2025, 3, 31))

        assert dashboard['totals']['orders'] == 1
        assert dashboard['totals']['products'] == 1


class TestSummarizeCustomers:

    def test_groups_by_name_and_phone(self, make_order):
        orders = [
            make_order(id=3, customer_name='Nusrat Jahan', phone='01711000000', total=Decimal('1000'),
                       address='New flat, Uposhohor', order_date=date(2025, 3, 10)),
            make_order(id=2, customer_name='Rafiq Islam', phone='01811000000', total=Decimal('5000'),
                       order_date=date(2025, 2, 1)),
            make_order(id=1, customer_name='Nusrat Jahan', phone='01711000000', total=Decimal('2500'),
                       address='House 12, Shaheb Bazar', order_date=date(2025, 1, 5)),
        ]

        customers = summarize_customers(orders)

        assert [c['name'] for c in customers] == ['Rafiq Islam', 'Nusrat Jahan']
        nusrat = customers[1]
        assert nusrat['total_orders'] == 2
        assert nusrat['total_spent'] == 3500.0
        assert nusrat['location'] == 'New flat, Uposhohor'
        assert nusrat['last_order_date'] == '2025-03-10'

    def test_same_name_different_phone_are_different_customers(self, make_order):
        orders = [
            make_order(id=1, customer_name='Ayesha', phone='01700000001'),
            make_order(id=2, customer_name='Ayesha', phone='01700000002'),
        ]

        assert len(summarize_customers(orders)) == 2

    def test_service_uses_all_orders(self, make_order):
        order_repo = MagicMock()
        order_repo.list_all.return_value = [make_order()]

        customers = CustomerService(order_repo).get_customers()

        assert customers[0]['name'] == 'Nusrat Jahan'
        assert customers[0]['total_spent'] == 7260.0


class TestBuildInvoice:

    def test_invoice_document(self, make_order):
        invoice = build_invoice(make_order())

        assert invoice['store'] == {
            'name': 'Rodelas lifestyle',
            'tagline': 'Your destination for premium apparel.',
            'support_email': 'support@rodelas.com',
        }
        assert invoice['invoice_number'] == 'ORD-20250301-A1B2C3'
        assert invoice['currency'] == 'BDT'
        assert invoice['lines'][0] == {
            'name': 'Elegant Floral Three-Piece', 'quantity': 2, 'unit_price': 3200.0, 'line_total': 6400.0
        }
        assert invoice['subtotal'] == 7200.0
        assert invoice['shipping'] == 60.0
        assert invoice['total'] == 7260.0
        assert invoice['bill_to']['city'] == 'Rajshahi'
        assert invoice['date'] == '2025-03-01'
