"""
Sample payload generator for the storefront client.

Writes deterministic pseudo-random JSON payloads shaped like the backend's
account, product and category resources. Output files can back a mock server
or be fed straight into tests.
"""

from __future__ import annotations

import json
import random
import sys
import time
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import typer

app = typer.Typer(help="Generate sample backend payloads as JSON files.")

_FIRST_NAMES = ["Ana", "Bruno", "Carla", "Diego", "Elena", "Farid", "Grace", "Hiro"]
_LAST_NAMES = ["Garcia", "Diaz", "Perez", "Flores", "Novak", "Okafor", "Smith", "Tanaka"]
_STATUSES = ["active", "inactive", "pending", None]
_CATEGORIES = ["Phones", "Laptops", "Audio", "Cameras", "Wearables", "Gaming", "Home"]
_BRANDS = [("Acme", "ACM"), ("Globex", "GBX"), ("Initech", "INI"), ("Umbrella", "UMB")]


def _generate_users(rng: random.Random, count: int, now: datetime) -> list[dict[str, Any]]:
    users: list[dict[str, Any]] = []
    for i in range(count):
        first = rng.choice(_FIRST_NAMES)
        last = rng.choice(_LAST_NAMES)
        user: dict[str, Any] = {"id": str(i + 1), "name": f"{first} {last}"}
        if rng.random() < 0.8:
            user["email"] = f"{first}.{last}{i}@example.com".lower()
        if rng.random() < 0.6:
            user["phone"] = f"+1-555-{rng.randint(0, 9999):04d}"
        if rng.random() < 0.9:
            created = now - timedelta(days=rng.randint(0, 120), minutes=rng.randint(0, 1440))
            user["createdAt"] = created.isoformat().replace("+00:00", "Z")
        status = rng.choice(_STATUSES)
        if status is not None:
            user["status"] = status
        if rng.random() < 0.3:
            user["role"] = rng.choice(["admin", "customer"])
        users.append(user)
    return users


def _generate_categories() -> list[dict[str, Any]]:
    return [
        {
            "categoryId": index + 1,
            "categoryName": name,
            "imageUrl": f"/images/categories/{name.lower()}.png",
            "parentId": None,
            "status": True,
        }
        for index, name in enumerate(_CATEGORIES)
    ]


def _generate_products(rng: random.Random, count: int) -> list[dict[str, Any]]:
    products: list[dict[str, Any]] = []
    for i in range(count):
        brand_name, short_name = rng.choice(_BRANDS)
        original = round(rng.uniform(10, 2_000), 2)
        discounted = rng.random() < 0.5
        final = round(original * rng.uniform(0.5, 0.95), 2) if discounted else original
        in_stock = rng.random() < 0.85
        products.append(
            {
                "productId": f"P{i + 1:04d}",
                "productName": f"{brand_name} {rng.choice(_CATEGORIES)} {i + 1}",
                "originalPrice": original,
                "finalPrice": final,
                "thumbnail": f"/images/products/P{i + 1:04d}.jpg",
                "shortDescription": "<p>Sample product description.</p>",
                "availability": "In Stock" if in_stock else "Out of Stock",
                "inStock": in_stock,
                "rating": f"{rng.uniform(2.5, 5.0):.1f}",
                "brand": {"brandName": brand_name, "shortName": short_name},
                "category": {"categoryName": rng.choice(_CATEGORIES)},
                "discount": {
                    "enabled": discounted,
                    "type": "percentage",
                    "amount": f"{round((1 - final / original) * 100)}",
                },
                "featured": rng.random() < 0.3,
            }
        )
    return products


def _write_fixtures(
    output_dir: Path, users: int, products: int, seed: int, envelope: bool = True
) -> dict[str, Path]:
    rng = random.Random(seed)
    now = datetime.now(UTC)
    payloads = {
        "users": _generate_users(rng, users, now),
        "products": _generate_products(rng, products),
        "categories": _generate_categories(),
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}
    for name, records in payloads.items():
        path = output_dir / f"{name}.json"
        body: Any = {"data": records} if envelope else records
        with path.open("w", encoding="utf-8") as f:
            json.dump(body, f, indent=2)
        written[name] = path
    return written


@app.command()
def main(
    users: int = typer.Option(
        250,
        "--users",
        "-u",
        help="Number of account records to generate.",
    ),
    products: int = typer.Option(
        40,
        "--products",
        "-p",
        help="Number of product records to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path = typer.Option(
        Path("fixtures"),
        "--output",
        "-o",
        help="Directory to write the JSON files into.",
    ),
    bare: bool = typer.Option(
        False,
        "--bare",
        help="Write bare arrays instead of {\"data\": [...]} envelopes.",
    ),
) -> None:
    """
    Generate sample payloads for users, products and categories.
    """
    start = time.perf_counter()
    written = _write_fixtures(output, users=users, products=products, seed=seed, envelope=not bare)
    duration = time.perf_counter() - start
    for name, path in written.items():
        typer.echo(f"{name:<10} -> {path}")
    typer.echo(f"Fixtures written in {duration:.2f}s (seed={seed}).")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
