# eas_offchain/compact/__init__.py
