"""
Maintenance tools for the landscape graph file.

- github: enrich nodes with GitHub repository metadata
- links: verify url/github links, find duplicate labels and orphaned nodes
"""
