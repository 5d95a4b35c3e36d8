# eas_offchain/cli/__init__.py
