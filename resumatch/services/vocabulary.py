"""Curated vocabulary tables used by the matching pipeline.

Every list the extractors and matchers consult lives here as an immutable
table so it can be tested and extended without touching matching logic.
Bump ``VOCABULARY_VERSION`` whenever a table changes, since scores are only
comparable between runs that used the same vocabulary.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


VOCABULARY_VERSION = "2024.2"


class TechCategory(str, Enum):
    """The six technical categories a TermSet is split into."""

    PROGRAMMING_LANGUAGES = "programming_languages"
    FRAMEWORKS = "frameworks"
    TOOLS = "tools"
    PLATFORMS = "platforms"
    DATABASES = "databases"
    METHODOLOGIES = "methodologies"


CATEGORY_TERMS: MappingProxyType = MappingProxyType({
    TechCategory.PROGRAMMING_LANGUAGES: frozenset({
        "javascript", "typescript", "python", "java", "c++", "c#", "c", "php",
        "ruby", "go", "rust", "swift", "kotlin", "scala", "r", "matlab",
        "perl", "shell", "bash", "powershell", "sql", "html", "css",
        "dart", "lua", "clojure", "haskell", "erlang", "elixir",
    }),
    TechCategory.FRAMEWORKS: frozenset({
        "react", "angular", "vue", "svelte", "ember", "backbone",
        "node.js", "express", "nestjs", "fastapi", "django", "flask",
        "spring", "hibernate", "struts", "play framework",
        "laravel", "symfony", "codeigniter", "rails", "sinatra",
        ".net", "asp.net", "entity framework", "nhibernate",
        "jquery", "bootstrap", "tailwind", "material-ui", "ant design",
        "next.js", "nuxt.js", "gatsby", "remix", "sveltekit",
        "graphql", "apollo", "relay", "prisma",
        "tensorflow", "pytorch", "keras", "scikit-learn", "pandas", "numpy",
    }),
    TechCategory.TOOLS: frozenset({
        "git", "github", "gitlab", "bitbucket", "svn",
        "docker", "kubernetes", "jenkins", "ci/cd", "github actions",
        "aws", "azure", "gcp", "google cloud", "heroku", "vercel",
        "terraform", "ansible", "chef", "puppet",
        "jira", "confluence", "slack", "trello", "asana",
        "postman", "insomnia", "swagger", "api",
        "webpack", "vite", "rollup", "parcel", "babel",
        "eslint", "prettier", "jest", "mocha", "cypress", "selenium",
        "figma", "sketch", "adobe xd", "invision",
        "mongodb", "mysql", "postgresql", "redis", "elasticsearch",
        "kafka", "rabbitmq", "nginx", "apache",
    }),
    TechCategory.PLATFORMS: frozenset({
        "linux", "windows", "macos", "unix",
        "ios", "android", "mobile",
        "web", "desktop", "cloud", "saas", "paas", "iaas",
        "microservices", "serverless", "monolith",
    }),
    TechCategory.DATABASES: frozenset({
        "mysql", "postgresql", "mongodb", "redis", "cassandra",
        "oracle", "sql server", "sqlite", "dynamodb",
        "elasticsearch", "solr", "neo4j", "couchdb",
        "mariadb", "firebase", "supabase",
    }),
    TechCategory.METHODOLOGIES: frozenset({
        "agile", "scrum", "kanban", "waterfall", "devops",
        "ci/cd", "tdd", "bdd", "pair programming", "code review",
        "microservices", "rest", "soap", "graphql", "api design",
    }),
})

# Weight of each category in the overall technical match score
CATEGORY_WEIGHTS: MappingProxyType = MappingProxyType({
    TechCategory.PROGRAMMING_LANGUAGES: 0.25,
    TechCategory.FRAMEWORKS: 0.20,
    TechCategory.TOOLS: 0.15,
    TechCategory.DATABASES: 0.15,
    TechCategory.PLATFORMS: 0.10,
    TechCategory.METHODOLOGIES: 0.15,
})

# Label and priority a category term carries in the full-text skills scan
CATEGORY_SKILL_LABELS: MappingProxyType = MappingProxyType({
    TechCategory.PROGRAMMING_LANGUAGES: ("programmingLanguage", "critical"),
    TechCategory.FRAMEWORKS: ("framework", "high"),
    TechCategory.TOOLS: ("tool", "medium"),
    TechCategory.DATABASES: ("database", "high"),
    TechCategory.PLATFORMS: ("platform", "medium"),
    TechCategory.METHODOLOGIES: ("methodology", "medium"),
})

COMPOUND_TERMS: tuple[str, ...] = (
    "machine learning", "deep learning", "artificial intelligence", "ai", "ml", "dl",
    "cloud computing", "cloud services", "cloud infrastructure",
    "data science", "data analytics", "big data", "data engineering",
    "software engineering", "software development", "web development",
    "mobile development", "ios development", "android development",
    "full stack", "frontend", "front end", "backend", "back end",
    "devops", "site reliability", "sre", "infrastructure as code",
    "test driven development", "tdd", "behavior driven development", "bdd",
    "continuous integration", "continuous deployment", "ci/cd",
    "application programming interface", "rest api", "graphql api",
    "user interface", "ui", "user experience", "ux",
    "responsive design", "progressive web app", "pwa",
    "object oriented programming", "oop", "functional programming",
    "microservices architecture", "service oriented architecture", "soa",
    "domain driven design", "ddd", "model view controller", "mvc",
    "representational state transfer", "rest", "simple object access protocol", "soap",
)

# Extra skills checked by the full-text scan on top of the category terms
SKILL_CATALOG: tuple[str, ...] = (
    "javascript", "typescript", "python", "java", "c++", "c#", "php", "ruby", "go", "rust",
    "swift", "kotlin", "scala", "r", "matlab", "perl", "sql", "html", "css",
    "react", "angular", "vue", "svelte", "ember", "node.js", "express", "nestjs",
    "django", "flask", "fastapi", "spring", "laravel", "rails", ".net",
    "next.js", "nuxt.js", "gatsby", "graphql",
    "git", "github", "docker", "kubernetes", "jenkins", "aws", "azure", "gcp",
    "terraform", "ansible", "jira", "slack", "postman", "webpack", "vite",
    "mysql", "postgresql", "mongodb", "redis", "elasticsearch", "cassandra",
    "agile", "scrum", "kanban", "devops", "ci/cd", "tdd", "microservices",
    "machine learning", "deep learning", "ai", "data science", "big data",
)

SKILL_VARIATIONS: MappingProxyType = MappingProxyType({
    "javascript": ("js", "jsx", "ecmascript", "es6", "es2015", "node.js", "nodejs"),
    "typescript": ("ts", "tsx"),
    "python": ("py", "python3", "python2"),
    "react": ("react.js", "reactjs", "react native"),
    "angular": ("angularjs", "angular.js", "angular 2"),
    "vue": ("vue.js", "vuejs"),
    "node.js": ("node", "nodejs"),
    "express": ("express.js", "expressjs"),
    "html": ("html5", "xhtml"),
    "css": ("css3", "scss", "sass", "less"),
    "sql": ("mysql", "postgresql", "sqlite"),
    "git": ("github", "gitlab", "bitbucket"),
    "aws": ("amazon web services", "amazon aws"),
    "docker": ("docker container", "dockerfile"),
    "kubernetes": ("k8s", "kube"),
    "machine learning": ("ml", "deep learning", "ai"),
    "artificial intelligence": ("ai", "machine learning"),
    "ci/cd": ("continuous integration", "continuous deployment", "cicd"),
    "rest": ("rest api", "restful", "restful api"),
    "graphql": ("gql",),
    "mongodb": ("mongo", "mongo db"),
    "postgresql": ("postgres", "postgres db"),
    "redis": ("redis cache",),
    "elasticsearch": ("elastic search", "es"),
    "microservices": ("micro service", "micro-service"),
    "agile": ("scrum", "kanban"),
    "devops": ("dev ops", "sre"),
})

TECH_FAMILIES: MappingProxyType = MappingProxyType({
    "javascript": ("typescript", "node.js", "react", "angular", "vue"),
    "python": ("django", "flask", "fastapi", "pandas", "numpy"),
    "java": ("spring", "hibernate", "maven", "gradle"),
    "react": ("next.js", "gatsby", "remix"),
    "aws": ("azure", "gcp", "google cloud"),
    "docker": ("kubernetes", "containerization"),
})

# Keywords whose presence in both texts earns the co-occurrence boost
BOOST_TECH_KEYWORDS: tuple[str, ...] = (
    "javascript", "python", "java", "react", "node.js", "sql",
    "aws", "docker", "kubernetes", "typescript", "angular", "vue",
)

CERTIFICATION_KEYWORDS: tuple[str, ...] = ("certified", "certification", "cert", "license")

EDUCATION_LEVELS: MappingProxyType = MappingProxyType({
    "phd": 5,
    "ph.d": 5,
    "doctorate": 5,
    "master": 4,
    "master's": 4,
    "masters": 4,
    "mba": 4,
    "bachelor": 3,
    "bachelor's": 3,
    "bachelors": 3,
    "btech": 3,
    "b.tech": 3,
    "b.e": 3,
    "degree": 2,
    "diploma": 1,
})

SOFT_SKILLS: tuple[str, ...] = (
    "leadership", "communication", "teamwork", "collaboration",
    "problem-solving", "analytical", "critical thinking", "adaptability",
)

# Skill lists the structured parser tests by substring containment
RESUME_SKILL_GROUPS: MappingProxyType = MappingProxyType({
    "technical": (
        "javascript", "python", "java", "c++", "c#", "react", "angular", "vue", "node.js",
        "sql", "mongodb", "postgresql", "aws", "docker", "kubernetes", "git", "linux",
        "html", "css", "typescript", "php", "ruby", "go", "rust", "swift", "kotlin",
    ),
    "soft": (
        "leadership", "communication", "teamwork", "problem-solving", "collaboration",
        "time management", "critical thinking", "adaptability", "creativity", "analytical",
    ),
    "tools": (
        "jira", "confluence", "slack", "trello", "asana", "figma", "sketch", "photoshop",
        "excel", "powerpoint", "word", "outlook",
    ),
    "languages": ("english", "spanish", "french", "german", "chinese", "japanese"),
})

ENGLISH_STOPWORDS: frozenset[str] = frozenset({
    "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you", "your",
    "yours", "yourself", "yourselves", "he", "him", "his", "himself", "she", "her",
    "hers", "herself", "it", "its", "itself", "they", "them", "their", "theirs",
    "themselves", "what", "which", "who", "whom", "this", "that", "these", "those",
    "am", "is", "are", "was", "were", "be", "been", "being", "have", "has", "had",
    "having", "do", "does", "did", "doing", "a", "an", "the", "and", "but", "if",
    "or", "because", "as", "until", "while", "of", "at", "by", "for", "with",
    "about", "against", "between", "into", "through", "during", "before", "after",
    "above", "below", "to", "from", "up", "down", "in", "out", "on", "off", "over",
    "under", "again", "further", "then", "once", "here", "there", "when", "where",
    "why", "how", "all", "any", "both", "each", "few", "more", "most", "other",
    "some", "such", "no", "nor", "not", "only", "own", "same", "so", "than", "too",
    "very", "s", "t", "can", "will", "just", "don", "should", "now", "d", "ll", "m",
    "o", "re", "ve", "y", "ain", "aren", "couldn", "didn", "doesn", "hadn", "hasn",
    "haven", "isn", "ma", "mightn", "mustn", "needn", "shan", "shouldn", "wasn",
    "weren", "won", "wouldn", "would", "could", "also",
})

# Ordinary English words that never count as free-form technical keywords
COMMON_WORDS: frozenset[str] = frozenset({
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
    "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
    "this", "but", "his", "by", "from", "they", "we", "say", "her", "she",
    "or", "an", "will", "my", "one", "all", "would", "there", "their",
    "what", "so", "up", "out", "if", "about", "who", "get", "which", "go",
    "me", "when", "make", "can", "like", "time", "no", "just", "him", "know",
    "take", "people", "into", "year", "your", "good", "some", "could", "them",
    "see", "other", "than", "then", "now", "look", "only", "come", "its",
    "over", "think", "also", "back", "after", "use", "two", "how", "our",
    "work", "first", "well", "way", "even", "new", "want", "because", "any",
    "these", "give", "day", "most", "us", "is", "are", "was", "were", "been",
    "being", "has", "had", "does", "did", "doing", "done", "said", "says",
    "saying", "went", "goes", "going", "gone", "got", "gotten", "getting",
    "came", "comes", "coming", "made", "makes", "making", "took", "takes",
    "taking", "saw", "sees", "seeing", "seen", "found", "finds", "finding",
    "gave", "gives", "giving", "given", "told", "tells", "telling", "asked",
    "asks", "asking", "worked", "works", "working", "called", "calls",
    "calling", "tried", "tries", "trying", "needed", "needs", "needing",
    "wanted", "wants", "wanting", "seemed", "seems", "seeming", "helped",
    "helps", "helping", "showed", "shows", "showing", "shown", "moved",
    "moves", "moving", "lived", "lives", "living", "turned", "turns",
    "turning", "started", "starts", "starting", "stopped", "stops", "stopping",
    "opened", "opens", "opening", "closed", "closes", "closing", "walked",
    "walks", "walking", "ran", "runs", "running", "played", "plays", "playing",
    "studied", "studies", "studying", "learned", "learns", "learning", "taught",
    "teaches", "teaching", "thought", "thinks", "thinking", "brought", "brings",
    "bringing", "bought", "buys", "buying", "fought", "fights", "fighting",
    "caught", "catches", "catching", "chose", "chooses", "choosing", "chosen",
    "fell", "falls", "falling", "felt", "feels", "feeling", "flew", "flies",
    "flying", "forgot", "forgets", "forgetting", "forgotten", "grew", "grows",
    "growing", "grown", "hung", "hangs", "hanging", "heard", "hears", "hearing",
    "held", "holds", "holding", "hid", "hides", "hiding", "hidden", "hit", "hits",
    "hitting", "hurt", "hurts", "hurting", "kept", "keeps", "keeping", "knew",
    "knows", "knowing", "known", "laid", "lays", "laying", "led", "leads",
    "leading", "left", "leaves", "leaving", "lent", "lends", "lending", "let",
    "lets", "letting", "lay", "lies", "lying", "lain", "lost", "loses",
    "losing", "meant", "means", "meaning", "met", "meets", "meeting", "paid",
    "pays", "paying", "put", "puts", "putting", "read", "reads", "reading",
    "rode", "rides", "riding", "ridden", "rose", "rises", "rising", "risen",
    "sold", "sells", "selling", "sent", "sends", "sending", "set", "sets",
    "setting", "shook", "shakes", "shaking", "shaken", "shot", "shooting",
    "shut", "shuts", "shutting", "sat", "sits", "sitting", "slept", "sleeps",
    "sleeping", "spoke", "speaks", "speaking", "spoken", "spent", "spends",
    "spending", "spread", "spreads", "spreading", "stood", "stands", "standing",
    "stuck", "sticks", "sticking", "struck", "strikes", "striking", "taken",
    "tore", "tears", "tearing", "torn", "threw", "throws", "throwing", "thrown",
    "understood", "understands", "understanding", "woke", "wakes", "waking",
    "wore", "wears", "wearing", "worn", "won", "wins", "winning", "wrote",
    "writes", "writing", "written",
})

# Headings that start a new resume section
SECTION_HEADINGS: frozenset[str] = frozenset({
    "summary", "professional summary", "objective", "profile", "about", "about me",
    "experience", "work experience", "professional experience", "employment",
    "employment history", "work history", "career", "education", "academic background",
    "skills", "technical skills", "core competencies", "competencies",
    "certifications", "certificates", "licenses", "projects", "portfolio",
    "awards", "publications", "languages", "interests", "references", "contact",
})


def terms_for(category: TechCategory) -> frozenset[str]:
    """Return the vocabulary for a single category."""
    return CATEGORY_TERMS[category]
