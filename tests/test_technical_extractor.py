from resumatch.services.technical_extractor import (
    TermSet,
    extract_compound_terms,
    extract_requirements,
    extract_technical,
    extract_technical_keywords,
)
from resumatch.services.vocabulary import TechCategory


class TestExtractTechnical:
    """Category vocabulary lookups"""

    def test_empty_text(self):
        """Test empty text gives an empty TermSet"""
        terms = extract_technical("")
        assert terms == TermSet()
        assert terms.is_empty()
        assert terms.all_terms == frozenset()

    def test_terms_are_split_by_category(self):
        """Test terms land in their categories"""
        terms = extract_technical("We use Python, Django and PostgreSQL on AWS with Docker")
        assert "python" in terms.programming_languages
        assert "django" in terms.frameworks
        assert "postgresql" in terms.databases
        assert {"aws", "docker"} <= terms.tools
        assert terms.by_category(TechCategory.FRAMEWORKS) == terms.frameworks

    def test_java_is_distinct_from_javascript(self):
        """Test JavaScript does not also yield java"""
        terms = extract_technical("JavaScript developer")
        assert terms.programming_languages == frozenset({"javascript"})

    def test_all_terms_is_union(self):
        """Test all_terms covers every category"""
        terms = extract_technical("Python with React on Linux using Scrum")
        assert terms.all_terms == (
            terms.programming_languages | terms.frameworks | terms.tools
            | terms.platforms | terms.databases | terms.methodologies
        )
        assert {"python", "react", "linux", "scrum"} <= terms.all_terms

    def test_to_dict_is_sorted(self):
        """Test serialization gives sorted lists"""
        data = extract_technical("Rust, Python").to_dict()
        assert data["programming_languages"] == ["python", "rust"]
        assert data["all_terms"] == ["python", "rust"]


class TestJobRequirements:
    """Job description requirement extraction"""

    def test_compound_terms(self):
        """Test multi-word compound terms"""
        found = extract_compound_terms("Experience in machine learning and CI/CD pipelines")
        assert "machine learning" in found
        assert "ci/cd" in found

    def test_technical_keywords(self):
        """Test known terms and capitalized phrases are collected"""
        keywords = extract_technical_keywords(
            "Experience with Kubernetes and Terraform",
            known_terms={"kubernetes", "terraform"},
        )
        assert "kubernetes" in keywords
        assert "terraform" in keywords
        assert "with" not in keywords

    def test_requirements(self, sample_job):
        """Test years, education, certifications and soft skills"""
        job = sample_job + "\nMinimum 3 years in a lead role. AWS Certified Solutions Architect preferred."
        requirements = extract_requirements(job)

        assert 5 in requirements.experience_years
        assert 3 in requirements.experience_years
        assert "bachelor" in requirements.education_levels
        assert "degree" in requirements.education_levels
        assert any(c.startswith("aws certified") for c in requirements.certifications)
        assert {"communication", "leadership"} <= set(requirements.soft_skills)
        assert "python" in requirements.terms.programming_languages

    def test_empty_job(self):
        """Test an empty job description gives empty requirements"""
        requirements = extract_requirements("")
        assert requirements.terms.is_empty()
        assert requirements.technical_keywords == []
        assert requirements.experience_years == []
