"""
Default submodule registry.

SOURCES are full upstream repositories checked out under sources/<name>
for downstream documentation generation. VENDORS already ship ready-made
skill folders under their own skills/ directory; each entry maps the
vendor's skill folder name to the folder name published under skills/.
"""

SOURCES_DIR = "sources"
VENDOR_DIR = "vendor"
SKILLS_DIR = "skills"

DEFAULT_SOURCES: dict[str, str] = {
    "vue": "https://github.com/vuejs/docs",
    "nuxt": "https://github.com/nuxt/nuxt",
    "vite": "https://github.com/vitejs/vite",
    "unocss": "https://github.com/unocss/unocss",
}

DEFAULT_VENDORS: dict[str, dict] = {
    "slidev": {
        "official": True,
        "source": "https://github.com/slidevjs/slidev",
        "skills": {"slidev": "slidev"},
    },
    "vueuse": {
        "official": True,
        "source": "https://github.com/vueuse/skills",
        "skills": {"vueuse-functions": "vueuse"},
    },
    "vue-best-practices": {
        "source": "https://github.com/hyf0/vue-skills",
        "skills": {"vue-best-practices": "vue-best-practices"},
    },
}
