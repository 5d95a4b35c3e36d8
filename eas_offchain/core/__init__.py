# eas_offchain/core/__init__.py
