import pytest


SAMPLE_RESUME = """Jane Smith
jane.smith@example.com | (555) 123-4567 | Austin, TX 78701
linkedin.com/in/janesmith | github.com/janesmith

Professional Summary
Senior software engineer with 6 years of experience building scalable web services in Python and JavaScript. Led teams that delivered cloud platforms on AWS.

Work Experience
Senior Software Engineer
Acme Corp | Jan 2020 - Present
- Developed REST APIs in Python and Django serving 2M users
- Reduced infrastructure costs by 30% by migrating services to Docker and Kubernetes
- Led a team of 5 developers through agile sprints
Software Engineer
Globex Inc | Jun 2017 - Dec 2019
- Built React dashboards used by 200 customers
- Improved query performance by 40% on PostgreSQL

Education
Bachelor of Science in Computer Science
University of Texas
2013 - 2017

Skills
Python, JavaScript, React, Django, Docker, Kubernetes, AWS, PostgreSQL, Git, SQL
Leadership, Communication, Teamwork
Jira, Confluence, Slack

Certifications
AWS Certified Solutions Architect
"""

SAMPLE_JOB = """Senior Python Engineer

We are looking for a Senior Python Engineer with 5+ years of experience building web services.
Requirements:
- Strong Python and Django skills
- Experience with Docker, Kubernetes and AWS
- PostgreSQL and REST API design
- Bachelor's degree in Computer Science
- Excellent communication and leadership
"""


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def sample_job():
    return SAMPLE_JOB
