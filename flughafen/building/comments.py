"""Placing ``#`` comments into YAML written by :func:`flughafen.globals.yaml_io.dump_yaml`.

The dumper indents by two spaces and indents block sequences, so a workflow
looks like::

    jobs:
      build:
        steps:
          - name: Checkout

Comments are inserted above the job key or the step's ``-`` line.
"""

import re
from typing import Dict, List, Mapping

WORKFLOW_HEADER = """\
WARNING: This file is generated by flughafen

This workflow was generated from Python source code.
Direct edits to this YAML file will be lost on the next build.

To make changes:
  1. Edit the source Python workflow file
  2. Run: flughafen synth
"""

ACTION_HEADER = WORKFLOW_HEADER.replace("This workflow", "This action").replace("workflow file", "action file")

FUNDING_HEADER = """\
GitHub repository funding configuration
Learn more: https://docs.github.com/en/repositories/managing-your-repositorys-settings-and-features/customizing-your-repository/displaying-a-sponsor-button-in-your-repository
"""

_TOP_LEVEL_KEY = re.compile(r"^\S")
_JOB_KEY = re.compile(r"^  ([^\s#][^:]*):\s*$")
_JOB_FIELD = re.compile(r"^    \S")


def comment_lines(text: str, indent: str = "") -> List[str]:
    return [f"{indent}# {line}".rstrip() for line in text.split("\n")]


def header_block(text: str) -> str:
    return "\n".join(comment_lines(text.rstrip("\n"))) + "\n#\n"


def inject_job_comments(
    yaml_text: str, job_comments: Mapping[str, str], step_comments: Mapping[str, Dict[int, str]]
) -> str:
    out: List[str] = []
    in_jobs = in_steps = False
    job = None
    step_index = -1

    for line in yaml_text.split("\n"):
        if _TOP_LEVEL_KEY.match(line):
            in_jobs = line.rstrip() == "jobs:"
            in_steps = False
        elif in_jobs and _JOB_KEY.match(line):
            job = _JOB_KEY.match(line).group(1).strip("'\"")
            in_steps = False
            step_index = -1
            if job in job_comments:
                out += comment_lines(job_comments[job], "  ")
        elif in_jobs and line.rstrip() == "    steps:":
            in_steps = True
        elif in_steps and line.startswith("      - "):
            step_index += 1
            comment = step_comments.get(job, {}).get(step_index)
            if comment:
                out += comment_lines(comment, "      ")
        elif in_steps and _JOB_FIELD.match(line):
            in_steps = False
        out.append(line)

    return "\n".join(out)


def inject_action_step_comments(yaml_text: str, step_comments: Mapping[int, str]) -> str:
    out: List[str] = []
    in_runs = in_steps = False
    step_index = -1

    for line in yaml_text.split("\n"):
        if _TOP_LEVEL_KEY.match(line):
            in_runs = line.rstrip() == "runs:"
            in_steps = False
        elif in_runs and line.rstrip() == "  steps:":
            in_steps = True
        elif in_steps and line.startswith("    - "):
            step_index += 1
            if step_index in step_comments:
                out += comment_lines(step_comments[step_index], "    ")
        elif in_steps and re.match(r"^  \S", line):
            in_steps = False
        out.append(line)

    return "\n".join(out)
