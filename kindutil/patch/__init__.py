"""Applying merge and JSON 6902 patches to YAML document streams."""