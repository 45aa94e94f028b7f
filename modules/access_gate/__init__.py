"""
Access gate module.

File serving policy and keypair reveal, both keyed on mint state.
"""

from modules.access_gate.gate import AccessDecision, check_file_access
from modules.access_gate.reveal import reveal_keypair

__all__ = ["AccessDecision", "check_file_access", "reveal_keypair"]
