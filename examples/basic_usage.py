#!/usr/bin/env python3
"""Basic usage example for radixpack.

This example demonstrates:
1. Defining a record with Pydantic
2. Packing it into a single mixed-radix integer
3. Decoding back to a Pydantic model
4. Comparing against per-field bit packing and JSON
"""

from __future__ import annotations

import string
from typing import Annotated

from pydantic import Field

from radixpack import (
    BaseRecord,
    Bool,
    BoundedFloat,
    CharString,
    OneOf,
    Packed,
    Sequence,
    decode,
    encode,
    encoded_bits,
    encoded_size,
    field_capacities,
)


# Define a record class
class StatusReport(BaseRecord):
    """Underwater vehicle status report.

    Every field is bounded so its number of possible values is known.
    """

    vehicle_id: int = Field(ge=0, le=199, description="Vehicle ID (0-199)")
    depth_m: float = BoundedFloat(min=0.0, max=100.0, decimals=3, description="Depth")
    battery_pct: int = Field(ge=0, le=100, description="Battery percentage (0-100)")
    sea_state: str = OneOf(["calm", "moderate", "rough"])
    callsign: str = CharString(alphabet=string.ascii_uppercase + string.digits, max_length=6)
    thrusters_ok: Annotated[list[bool], Packed(Sequence.fixed(Bool(), 4))]
    active: bool = Field(description="Vehicle active flag")


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("radixpack Basic Usage Example")
    print("=" * 60)
    print()

    # Create a record instance
    print("1. Creating a status report...")
    msg = StatusReport(
        vehicle_id=42,
        depth_m=25.125,
        battery_pct=87,
        sea_state="moderate",
        callsign="AUV7",
        thrusters_ok=[True, True, False, True],
        active=True,
    )
    print(f"   {msg!r}")
    print()

    # Analyze field capacities
    print("2. Analyzing field capacities...")
    capacities = field_capacities(StatusReport)
    naive_bits = 0
    for field_name, capacity in capacities.items():
        bits = (capacity - 1).bit_length()
        naive_bits += bits
        print(f"   {field_name}: {capacity} values ({bits} bits on its own)")

    print(f"   Per-field bit packing: {naive_bits} bits")
    print(f"   Mixed radix: {encoded_bits(StatusReport)} bits = {encoded_size(StatusReport)} bytes")
    print()

    # Encode the record
    print("3. Encoding...")
    encoded_data = encode(msg)

    print(f"   Encoded size: {len(encoded_data)} bytes")
    print(f"   Hex: {encoded_data.hex()}")
    print()

    # Decode the record
    print("4. Decoding...")
    decoded_msg = decode(StatusReport, encoded_data)
    print(f"   {decoded_msg!r}")
    print()

    # Verify round-trip
    print("5. Verifying round-trip...")
    if decoded_msg == msg:
        print("   ✓ Round-trip successful! Records match.")
    else:
        print("   ✗ Round-trip failed! Records don't match.")
    print()

    # Compare to naive encoding
    print("6. Comparing to naive JSON encoding...")

    json_bytes = msg.model_dump_json().encode("utf-8")

    print(f"   radixpack size: {len(encoded_data)} bytes")
    print(f"   JSON size: {len(json_bytes)} bytes")
    print(f"   Compression ratio: {len(json_bytes) / len(encoded_data):.1f}x")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
