"""
org_provisioner.cli

Operator command for onboarding a new client organization.

Responsibilities:
- Derive the provisioning request from operator-friendly arguments.
- Call `POST /api/organization/provision` once and report the assigned ids.

Usage:
    org-provisioner-setup --domain clienta.com --org "Client A Inc." \\
        --admin admin@clienta.com --password 'SecurePass123!'
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Any

import httpx

DEFAULT_SERVER = "http://localhost:8080"
PROVISION_PATH = "/api/organization/provision"
DEFAULT_QUOTA = 10 * 1024**3  # 10 GB


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="org-provisioner-setup",
        description="Create a tenant, its domain, and a tenant admin account.",
    )
    parser.add_argument("--domain", required=True, help="Primary email domain for the organization")
    parser.add_argument("--org", required=True, help="Organization display name")
    parser.add_argument("--admin", required=True, help="Admin email address")
    parser.add_argument("--password", required=True, help="Password for the admin account")
    parser.add_argument(
        "--quota",
        type=int,
        default=DEFAULT_QUOTA,
        help=f"Disk quota in bytes for the organization (default: {DEFAULT_QUOTA} = 10GB)",
    )
    parser.add_argument("--server", default=DEFAULT_SERVER, help=f"Service URL (default: {DEFAULT_SERVER})")
    parser.add_argument(
        "--token",
        default=os.environ.get("ORGP_ADMIN_TOKEN", ""),
        help="Bearer token with tenant/domain/individual create permissions "
        "(default: ORGP_ADMIN_TOKEN)",
    )
    parser.add_argument("--brand-name", default=None)
    parser.add_argument("--brand-logo-url", default=None)
    parser.add_argument("--brand-theme", default=None)
    return parser


def tenant_slug(org_name: str) -> str:
    return org_name.strip().lower().replace(" ", "-")


def build_payload(args: argparse.Namespace) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "tenantName": tenant_slug(args.org),
        "description": args.org,
        "quota": args.quota,
        "domain": args.domain,
        "adminName": args.admin.partition("@")[0],
        "adminPassword": args.password,
        "adminEmail": args.admin,
    }
    optional = {
        "brandName": args.brand_name,
        "brandLogoUrl": args.brand_logo_url,
        "brandTheme": args.brand_theme,
    }
    payload.update({k: v for k, v in optional.items() if v is not None})
    return payload


def provision(client: httpx.Client, *, token: str, payload: dict[str, Any]) -> dict[str, int]:
    r = client.post(
        PROVISION_PATH,
        json=payload,
        headers={"Authorization": f"Bearer {token}"},
    )
    r.raise_for_status()
    return r.json()["data"]


def main(argv: list[str] | None = None, *, transport: httpx.BaseTransport | None = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.token:
        print("Error: --token (or ORGP_ADMIN_TOKEN) is required.", file=sys.stderr)
        return 1

    payload = build_payload(args)
    print(f"Provisioning organization '{args.org}' (tenant '{payload['tenantName']}')")
    print(f"  Domain : {args.domain}")
    print(f"  Admin  : {args.admin}")
    print(f"  Server : {args.server}")
    print(f"  Quota  : {args.quota // 1024**3} GB")

    with httpx.Client(base_url=args.server, transport=transport, timeout=30.0) as client:
        try:
            data = provision(client, token=args.token, payload=payload)
        except httpx.HTTPStatusError as e:
            print(f"API Error (HTTP {e.response.status_code}): {e.response.text}", file=sys.stderr)
            return 1
        except httpx.HTTPError as e:
            print(f"Request failed: {e}", file=sys.stderr)
            return 1

    print("Organization ready.")
    print(f"  Tenant id : {data['tenantId']}")
    print(f"  Domain id : {data['domainId']}")
    print(f"  Admin id  : {data['adminId']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
