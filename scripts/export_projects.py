"""Export the enriched project collection to a JSON file."""
import asyncio
import json
import sys
import logging
from dotenv import load_dotenv
from projects_api.api.schemas import ProjectResponse
from projects_api.config import Settings
from projects_api.container import build_project_cache

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')


logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


async def export_to_json(output_file: str = "projects.json") -> int:
    """Run one refresh and write the annotated projects to a JSON file.

    Args:
        output_file: Path to output JSON file

    Returns:
        Number of projects written
    """
    cache = build_project_cache(Settings.from_env())

    try:
        projects = await cache.get_all()
    finally:
        await cache.close()

    if not projects:
        logger.error("No projects fetched; GitHub may be unavailable")
        return 0

    records = [ProjectResponse.from_project(project).model_dump(by_alias=True) for project in projects]
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(records, f, ensure_ascii=False, indent=2)

    logger.info(f"Exported {len(records)} projects to {output_file}")
    return len(records)


if __name__ == "__main__":
    output_file = sys.argv[1] if len(sys.argv) > 1 else "projects.json"
    if asyncio.run(export_to_json(output_file)) == 0:
        sys.exit(1)
