#!/usr/bin/env python3
"""
Quick Start Examples: capability masks with fixedflags

Shows construction, set algebra, indexed access and the three codecs.
"""
import sys
sys.path.insert(0, "../src")

from fixedflags import BitFlags8, BitFlags128, dumps, pack

READ, WRITE, EXEC, ADMIN = 0, 1, 2, 7

print("=" * 80)
print("QUICK START EXAMPLES")
print("=" * 80)

# ============================================================================
# EXAMPLE 1: Building and combining masks
# ============================================================================
print("\nEXAMPLE 1: Building and combining masks")

user = BitFlags8.from_slice([READ, WRITE])
admin = BitFlags8.from_slice([READ, WRITE, EXEC, ADMIN])

print(f"user       = {user:b}")
print(f"admin      = {admin:b}")
print(f"admin-only = {admin - user:b} -> bits {list(admin - user)}")
print(f"admin contains user? {admin.contains(user)}")

# ============================================================================
# EXAMPLE 2: Trusted vs checked index access
# ============================================================================
print("\nEXAMPLE 2: Trusted vs checked index access")

print(f"bit {ADMIN}: {admin.bit_at_index(ADMIN)}")
print(f"bit 8 (checked): {admin.get_bit_at_index(8)}")
print(f"highest set bit index: {admin.highest_set_bit_index()}")

# ============================================================================
# EXAMPLE 3: Serialization
# ============================================================================
print("\nEXAMPLE 3: Serialization")

wide = [BitFlags128(0), BitFlags128(1 << 64), BitFlags128.full()]
print(f"json: {dumps(wide)}")
print(f"ron:  {dumps([user, admin], fmt='ron')}")
print(f"bin:  {pack([user, admin]).hex()}")
