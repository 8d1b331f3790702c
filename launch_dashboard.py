"""Launch the paged-table record browser against the artworks API."""

import paged_table as pt

config = pt.TableConfig.from_env()

print(f"Record source: {config.api_url}")
print(f"Rows per page: {config.rows_per_page}")
print("Launching dashboard...")

pt.browse(config)
