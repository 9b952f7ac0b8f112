import sys
import os
import argparse
import traceback

from config.settings import ServiceConfig
from database.api_client import ApiClient
from database.factor_repository import get_factor
from database.manager_repository import get_role_name
from modules.access_scope import AccessScopePolicy
from modules.cheque_lifecycle import ChequeLifecycle
from modules.relation_registry import RelationRegistry
from modules.report_generator import ReportGenerator
from reconciliation.payment_reconciler import PaymentReconciler
from utils.constants import (
    CHEQUE_STATUS_DISPLAY_NAMES,
    FACTOR_STATUS_DISPLAY_NAMES,
    PAYMENT_METHOD_DISPLAY_NAMES,
    PERSIAN_WEEKDAYS,
    ROLE_DISPLAY_NAMES,
    get_display_name,
)
from utils.date_utils import CalendarConverter, to_display
from utils.exceptions import SettlementError
from utils.helpers import format_currency, to_persian_digits
from utils.logger_config import setup_logger

# تنظیم کدگذاری کنسول برای نمایش درست متون فارسی
if sys.platform.startswith('win'):
    os.system('chcp 65001')
    if os.environ.get('PYTHONIOENCODING') != 'utf-8':
        os.environ['PYTHONIOENCODING'] = 'utf-8'

# راه‌اندازی لاگر
logger = setup_logger('main')


def cmd_today(client, args):
    converter = CalendarConverter()
    key = converter.today()
    print(f"{PERSIAN_WEEKDAYS[converter.day_of_week(key)]} {to_display(key)}")


def cmd_coverage(client, args):
    factor = get_factor(client, args.invoice_id)
    status = get_display_name(FACTOR_STATUS_DISPLAY_NAMES, factor.get('status'), '-')
    method = get_display_name(PAYMENT_METHOD_DISPLAY_NAMES, factor.get('paymentMethod'), '-')
    print(f"وضعیت فاکتور: {status}  روش پرداخت: {method}")

    reconciler = PaymentReconciler(client)
    result = reconciler.compute_coverage(args.invoice_id)
    print(f"پوشش: {format_currency(result.coverage)} ریال")
    print(f"پوشش پاس شده: {format_currency(result.passed_coverage)} ریال")
    print(f"مانده: {format_currency(result.remaining)} ریال")
    print(f"درصد پوشش: {to_persian_digits(result.coverage_percent)}%")


def cmd_history(client, args):
    lifecycle = ChequeLifecycle(client)
    for entry in lifecycle.history(args.cheque_id):
        status = get_display_name(CHEQUE_STATUS_DISPLAY_NAMES, entry.status)
        sayyadi = 'صیادی' if entry.sayyadi else '-'
        print(f"{entry.created_at}\t{status}\t{sayyadi}\t{entry.comment}")


def cmd_assign_customers(client, args):
    registry = RelationRegistry(client)
    if args.actor_id:
        policy = AccessScopePolicy(registry)
        role = policy.role_from_name(get_role_name(client, args.actor_id))
        policy.ensure_console_access(role)
        print(f"نقش اجرا کننده: {get_display_name(ROLE_DISPLAY_NAMES, role)}")
    result = registry.bulk_create(args.customer_ids, args.manager_id)
    print(f"جدید: {result.created}  تکراری: {result.duplicate}  ناموفق: {result.failed}")
    for customer_id, message in result.errors.items():
        print(f"  {customer_id}: {message}")
    return 0 if result.succeeded else 1


def cmd_report(client, args):
    generator = ReportGenerator(PaymentReconciler(client), output_dir=args.output_dir)
    print(generator.export_excel(args.invoice_ids))


def build_parser():
    parser = argparse.ArgumentParser(description='ابزار خط فرمان تسویه فاکتور و مدیریت چک')
    parser.add_argument('--base-url', help='آدرس سرویس داده')
    parser.add_argument('--token', help='توکن دسترسی')
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('today', help='تاریخ امروز شمسی').set_defaults(handler=cmd_today)

    coverage = subparsers.add_parser('coverage', help='پوشش پرداخت فاکتور')
    coverage.add_argument('invoice_id')
    coverage.set_defaults(handler=cmd_coverage)

    history = subparsers.add_parser('history', help='تاریخچه تغییرات چک')
    history.add_argument('cheque_id')
    history.set_defaults(handler=cmd_history)

    assign = subparsers.add_parser('assign-customers', help='اختصاص گروهی مشتریان به کارمند')
    assign.add_argument('manager_id')
    assign.add_argument('customer_ids', nargs='+')
    assign.add_argument('--actor-id', help='شناسه کاربر اجرا کننده برای بررسی نقش')
    assign.set_defaults(handler=cmd_assign_customers)

    report = subparsers.add_parser('report', help='گزارش اکسل پوشش فاکتورها')
    report.add_argument('invoice_ids', nargs='+')
    report.add_argument('--output-dir')
    report.set_defaults(handler=cmd_report)
    return parser


def main(argv=None):
    """
    تابع اصلی برنامه با مدیریت خطا و لاگینگ
    """
    args = build_parser().parse_args(argv)
    overrides = {}
    if args.base_url:
        overrides['base_url'] = args.base_url
    if args.token:
        overrides['token'] = args.token

    client = ApiClient(ServiceConfig.from_env(**overrides))
    try:
        logger.info(f"اجرای دستور {args.command}")
        return args.handler(client, args) or 0
    except SettlementError as e:
        print(f"خطا: {e.message}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.critical(f"خطای بحرانی در برنامه: {str(e)}")
        logger.critical(traceback.format_exc())
        raise
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
