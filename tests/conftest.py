"""Shared test configuration and fixtures."""

import pytest

from folio.config import Settings
from folio.services.document_loader import load_document_text


SAMPLE_YAML = """
cv:
  name: Jordan Rivera
  location: Lisbon, Portugal
  email: jordan@example.com
  phone: "+351 912 345 678"
  website: https://jordanrivera.dev
  resume_url: https://jordanrivera.dev/resume.pdf
  social_networks:
    - network: GitHub
      username: jrivera
    - network: LinkedIn
      username: jordan-rivera
  sections:
    intro:
      - Backend engineer focused on data pipelines and developer tooling.
      - Happiest when a slow batch job becomes a fast streaming one.
    technologies:
      - label: Languages
        details: Python, Go, SQL
      - label: Infrastructure
        details: Kubernetes, Terraform, PostgreSQL
    experience:
      - company: Streamline Analytics
        position: Senior Backend Engineer
        location: Lisbon
        start_date: 2022-03
        end_date: present
        highlights:
          - Rebuilt the ingestion pipeline in Python, cutting latency by 70%
          - Mentored four engineers
        team_size: 6
      - company: Northwind Labs
        position: Software Engineer
        location: Porto
        start_date: 2018-09
        end_date: 2022-02
        highlights:
          - Built internal CLI tooling used by 40 developers
    education:
      - institution: University of Porto
        area: Computer Science
        degree: MSc
        start_date: 2016-09
        end_date: 2018-07
    selected_projects:
      - name: Tidewater
        date: "2023"
        summary: Streaming ETL framework written in Python
        highlights:
          - 1.2k GitHub stars
      - name: Internal Dashboard
        date: "2021"
        summary: Metrics dashboard for the data team
        show_on_resume: false
    personal_projects:
      - name: Bookshelf
        date: "2020"
        summary: A small reading tracker
    publication:
      - title: Incremental Checkpointing for Stream Processors
        authors:
          - Jordan Rivera
          - Ana Costa
        date: 2021-06
        journal: Journal of Data Engineering
        doi: 10.1234/jde.2021.042
    certifications:
      - name: Certified Kubernetes Administrator
        date: "2022"
"""


@pytest.fixture
def document():
    return load_document_text(SAMPLE_YAML)


@pytest.fixture
def settings():
    """Defaults, independent of FOLIO_* variables in the environment."""
    return Settings(
        _env_file=None,
        document_path="data/portfolio.yaml",
        output_dir="dist",
        project_sections=["selected_projects", "personal_projects"],
        timeline_project_limit=5,
        filter_field="show_on_resume",
        remove_from_resume=["resume_url"],
        exclude_cv_fields=[],
        history_size=50,
        prompt_user="guest",
        prompt_host="portfolio",
        highlight_open="<mark>",
        highlight_close="</mark>",
        snippet_context=60,
    )
