"""CLI client for the WiseBond API: posts a bond with scenarios and prints a terminal report.

Usage:
    python bond-analyzer/analyze_bond.py --balance 900000 --rate 11.25 --payment 9443 --term 240 --start 2024-01-01 --extra 1000
    python bond-analyzer/analyze_bond.py --balance 1200000 --rate 11.75 --payment 13500 --term 300 --start 2022-06-01 \
        --lump-sum 100000 --lump-sum-at 12 --increase 500 --increase-at 2027-01-01
"""

import argparse
import asyncio
import re
import sys
from decimal import Decimal

import httpx


# ── Helpers ──────────────────────────────────────────────────────────────────

def _rand(v) -> str:
    return f"R{float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _duration(months: int) -> str:
    years, rem = divmod(int(months), 12)
    return f"{years} years, {rem} months"


def _trigger(value: str) -> tuple[str, str]:
    """'2027-01-01' is a date trigger, '12' a payment-number trigger."""
    if re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        return value, "date"
    return value, "payment_number"


# ── Payload ──────────────────────────────────────────────────────────────────

def build_payload(args: argparse.Namespace) -> dict:
    payload: dict = {
        "property": {
            "name": args.name or "",
            "current_loan_balance": str(args.balance),
            "current_interest_rate": str(args.rate),
            "current_monthly_payment": str(args.payment),
            "remaining_term": args.term,
            "loan_start_date": args.start,
        },
        "scenarios": [],
    }

    if args.extra is not None:
        start, start_type = _trigger(args.extra_from)
        scenario = {
            "type": "extra_monthly",
            "name": f"Extra {_rand(args.extra)} per month",
            "extra_monthly_amount": str(args.extra),
            "extra_monthly_start_date": start,
            "extra_monthly_start_type": start_type,
        }
        if args.extra_months is not None:
            scenario["extra_monthly_duration"] = args.extra_months
        payload["scenarios"].append(scenario)

    if args.lump_sum is not None:
        at, at_type = _trigger(args.lump_sum_at)
        payload["scenarios"].append({
            "type": "lump_sum",
            "name": f"Lump sum {_rand(args.lump_sum)}",
            "lump_sum_amount": str(args.lump_sum),
            "lump_sum_date": at,
            "lump_sum_date_type": at_type,
        })

    if args.increase is not None:
        at, at_type = _trigger(args.increase_at)
        payload["scenarios"].append({
            "type": "monthly_increase",
            "name": f"Increase payment by {_rand(args.increase)}",
            "monthly_increase_amount": str(args.increase),
            "monthly_increase_start_date": at,
            "monthly_increase_start_type": at_type,
            "monthly_increase_frequency": args.increase_frequency,
        })

    if args.as_of:
        payload["as_of"] = args.as_of
    return payload


# ── Report sections ──────────────────────────────────────────────────────────

def print_baseline(data: dict) -> None:
    prop = data["property"]
    schedule = data["baseline_schedule"]
    _header(f"Bond {prop.get('name') or ''}".rstrip())
    print(f"  Balance:          {_rand(prop['current_loan_balance'])}")
    print(f"  Interest rate:    {float(prop['current_interest_rate']):.2f}%")
    print(f"  Monthly payment:  {_rand(prop['current_monthly_payment'])}")
    print(f"  Remaining term:   {_duration(prop['remaining_term'])}")
    if schedule:
        total_interest = sum(Decimal(r["interest_payment"]) for r in schedule)
        print(f"  Payoff date:      {schedule[-1]['payment_date']}")
        print(f"  Total interest:   {_rand(total_interest)}")
    else:
        print("  Nothing left to pay.")


def print_scenario_result(result: dict) -> None:
    scenario = result["scenario"]
    _header(scenario["name"] or scenario["type"])
    print(f"  Interest saved:   {_rand(result['total_interest_saved'])}")
    print(f"  Time saved:       {_duration(result['months_saved'])}")
    print(f"  New payoff date:  {result['new_payoff_date'] or 'n/a'}")
    print(f"  Total paid:       {_rand(result['total_amount_paid'])}"
          f"  (was {_rand(result['original_total_amount'])})")


def print_yearly_table(data: dict) -> None:
    yearly = data.get("baseline_yearly_summary", [])
    if not yearly:
        return
    _header("Baseline by Year")
    print(f"  {'Yr':>3}  {'Principal':>14}  {'Interest':>14}  {'Balance':>14}")
    for y in yearly:
        print(
            f"  {y['year']:>3}  {_rand(y['principal']):>14}  "
            f"{_rand(y['interest']):>14}  {_rand(y['ending_balance']):>14}"
        )


def print_report(data: dict, yearly: bool = False) -> None:
    print_baseline(data)
    if yearly:
        print_yearly_table(data)
    for result in data.get("scenario_results", []):
        print_scenario_result(result)
    if data.get("combined_scenario_result"):
        print_scenario_result(data["combined_scenario_result"])


# ── Main ─────────────────────────────────────────────────────────────────────

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Analyze bond repayment scenarios via the WiseBond API"
    )
    parser.add_argument("--name", help="Property name")
    parser.add_argument("--balance", type=Decimal, required=True, help="Current loan balance")
    parser.add_argument("--rate", type=Decimal, required=True, help="Annual interest rate in percent")
    parser.add_argument("--payment", type=Decimal, required=True, help="Current monthly payment")
    parser.add_argument("--term", type=int, required=True, help="Remaining term in months")
    parser.add_argument("--start", required=True, help="Loan start date (YYYY-MM-DD)")
    parser.add_argument("--as-of", help="Projection date (default: today)")
    parser.add_argument("--extra", type=Decimal, help="Extra monthly payment")
    parser.add_argument("--extra-from", default="1", help="Payment number or date the extra starts")
    parser.add_argument("--extra-months", type=int, help="Stop the extra after this many payments")
    parser.add_argument("--lump-sum", type=Decimal, help="Once-off lump sum")
    parser.add_argument("--lump-sum-at", default="1", help="Payment number or date of the lump sum")
    parser.add_argument("--increase", type=Decimal, help="Monthly payment increase")
    parser.add_argument("--increase-at", default="1", help="Payment number or date of the increase")
    parser.add_argument("--increase-frequency", choices=["once", "annually"], default="once")
    parser.add_argument("--yearly", action="store_true", help="Print the baseline by year")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    return parser.parse_args(argv)


async def main() -> None:
    args = parse_args()
    payload = build_payload(args)
    url = f"{args.api_url}/api/v1/analysis"

    async with httpx.AsyncClient(timeout=60) as client:
        try:
            resp = await client.post(url, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn wisebond.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

    if resp.status_code != 200:
        print(f"Error: API returned {resp.status_code}", file=sys.stderr)
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        print(f"  {detail}", file=sys.stderr)
        sys.exit(1)

    print_report(resp.json(), yearly=args.yearly)


if __name__ == "__main__":
    asyncio.run(main())
