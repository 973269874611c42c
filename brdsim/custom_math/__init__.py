"""
Integer encoding of pure-strategy profiles for binary games.
"""

from brdsim.custom_math.profile_codec import (
    num_profiles, encode, decode, flip, all_profiles,
    smallest_missing, format_profile
)
