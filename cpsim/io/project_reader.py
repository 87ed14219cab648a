import logging
import os
import re
import tomllib
from datetime import date

from cpsim.domain.person import Availability, Person, PersonError
from cpsim.domain.project import Project
from cpsim.domain.task import Estimate, Task, TaskError
from cpsim.utils.days import parse_day

logger = logging.getLogger(__name__)

AVAILABILITY_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2}) to (\d{4}-\d{2}-\d{2}) at ([\d.]+) hours?$"
)


class ProjectFileError(ValueError):
    """Exception raised when a project file cannot be read or parsed."""

    pass


class ProjectFileReader:
    """
    Reads project definitions from markdown files.

    A project file holds two sections, "## Admin" and "## Tasks", each
    containing TOML, optionally inside a ```toml fence.
    """

    def __init__(self, project_file_pattern="{id}"):
        """
        Args:
            project_file_pattern: Path pattern in which every "{id}" is
                replaced by the project id, e.g. "~/projects/{id}.md".
                The default treats the project id as the path itself.
        """
        self.project_file_pattern = project_file_pattern

    def get_project_file_path(self, project_id):
        return os.path.expanduser(self.project_file_pattern.replace("{id}", project_id))

    def read_project(self, project_id):
        """Read and parse a project definition file."""
        return self.read_project_file(self.get_project_file_path(project_id))

    def read_project_file(self, file_path):
        if not os.path.exists(file_path):
            raise ProjectFileError(f"Project file not found: {file_path}")

        logger.info("Reading project file %s", file_path)
        with open(file_path, encoding="utf-8") as f:
            return self.parse_project(f.read())

    def parse_project(self, content):
        admin_section = extract_toml_section(content, "## Admin")
        tasks_section = extract_toml_section(content, "## Tasks")

        if admin_section is None:
            raise ProjectFileError("Project file must contain an '## Admin' section")
        if tasks_section is None:
            raise ProjectFileError("Project file must contain a '## Tasks' section")

        admin_data = self._load_toml(admin_section, "Admin")
        tasks_data = self._load_toml(tasks_section, "Tasks")

        start_date, people = self.parse_admin_section(admin_data)
        return Project(start_date, people=people, tasks=self.parse_tasks_section(tasks_data))

    @staticmethod
    def _load_toml(text, section_name):
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ProjectFileError(f"Invalid TOML in '## {section_name}' section: {e}") from e

    def parse_admin_section(self, data):
        if "start_date" not in data:
            raise ProjectFileError("Admin section must define start_date")
        start_date = self.parse_date_value(data["start_date"])

        people = {}
        for person_id, person_data in data.get("person", {}).items():
            availability = person_data.get("availability", [])
            if not isinstance(availability, list):
                raise ProjectFileError(f"Availability of {person_id} must be a list")
            try:
                people[person_id] = Person(
                    person_id, [self.parse_availability(text) for text in availability]
                )
            except PersonError as e:
                raise ProjectFileError(f"Invalid availability for {person_id}: {e}") from e

        return start_date, people

    def parse_tasks_section(self, data):
        tasks = {}
        for task_id, task_data in data.items():
            if not isinstance(task_data, dict):
                raise ProjectFileError(f"Task {task_id} must be a table")
            estimate_data = task_data.get("estimate_days", {})
            try:
                tasks[task_id] = Task(
                    task_id,
                    summary=task_data.get("summary", ""),
                    description=task_data.get("description", ""),
                    estimate=Estimate(
                        min=estimate_data.get("min", 0),
                        max=estimate_data.get("max", 0),
                        expected=estimate_data.get("expected", 0),
                    ),
                    status=task_data.get("status", "not-started"),
                    owners=task_data.get("owners", []),
                    dependencies=task_data.get("dependencies", []),
                )
            except TaskError as e:
                raise ProjectFileError(f"Invalid task {task_id}: {e}") from e
        return tasks

    @staticmethod
    def parse_date_value(value):
        # TOML local dates arrive as date objects, quoted ones as strings
        if isinstance(value, date):
            return value
        try:
            return parse_day(value)
        except ValueError as e:
            raise ProjectFileError(str(e)) from e

    @staticmethod
    def parse_availability(text):
        match = AVAILABILITY_PATTERN.match(text.strip()) if isinstance(text, str) else None
        if not match:
            raise ProjectFileError(
                f'Invalid availability format: {text}. '
                f'Expected "YYYY-MM-DD to YYYY-MM-DD at # hours"'
            )
        try:
            return Availability(
                parse_day(match.group(1)), parse_day(match.group(2)), float(match.group(3))
            )
        except (ValueError, PersonError) as e:
            raise ProjectFileError(f"Invalid availability {text}: {e}") from e


def extract_toml_section(content, section_header):
    """
    Collect the lines under a markdown heading, up to the next "##"
    heading or the end of the code fence they sit in.

    Returns:
        str: The section body, or None if the section is missing or empty
    """
    in_section = False
    section_lines = []

    for line in content.splitlines():
        stripped = line.strip()

        if stripped == section_header:
            in_section = True
            continue
        if not in_section:
            continue
        if stripped.startswith("##"):
            break
        if stripped.startswith("```toml"):
            continue
        if stripped.startswith("```"):
            break
        section_lines.append(line)

    if not section_lines:
        return None
    return "\n".join(section_lines)
