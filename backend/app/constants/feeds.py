"""Static feed configuration shared across the pipeline."""

# Category -> ordered feed URLs. Order drives scrape and storage order.
RSS_FEEDS: dict[str, list[str]] = {
    "technology": [
        "https://techcrunch.com/feed/",
        "https://www.wired.com/feed/",
        "https://arstechnica.com/feed/",
        "https://www.theverge.com/rss/index.xml",
        "https://feeds.feedburner.com/venturebeat/SZYF",
        "https://www.engadget.com/rss.xml",
    ],
    "ai": [
        "https://artificialintelligence-news.com/feed/",
        "https://www.marktechpost.com/feed/",
        "https://feeds.feedburner.com/oreilly/radar",
        "https://openai.com/blog/rss.xml",
        "https://deepmind.com/blog/feed/basic/",
    ],
    "business": [
        "https://www.forbes.com/innovation/feed2/",
        "https://hbr.org/feed",
        "https://www.entrepreneur.com/latest.rss",
        "https://www.inc.com/rss/homepage.xml",
        "https://feeds.feedburner.com/fastcompany/headlines",
    ],
    "art": [
        "https://www.artsy.net/articles.rss",
        "https://hyperallergic.com/feed/",
        "https://www.thisiscolossal.com/feed/",
        "https://www.designboom.com/readers/dbinstagram/rss.php",
        "https://www.creativebloq.com/feed",
    ],
    "animals": [
        "https://www.nationalgeographic.com/animals/rss/",
        "https://www.sciencedaily.com/rss/plants_animals.xml",
        "https://www.worldwildlife.org/rss",
        "https://news.mongabay.com/feed/",
        "https://www.animalplanet.com/feed.rss",
    ],
    "education": [
        "https://www.edutopia.org/rss.xml",
        "https://www.edsurge.com/articles_rss",
        "https://www.chronicle.com/section/news/rss",
        "https://www.insidehighered.com/rss.xml",
        "https://hechingerreport.org/feed/",
    ],
    "science": [
        "https://www.sciencedaily.com/rss/all.xml",
        "https://phys.org/rss-feed/",
        "https://www.nature.com/nature.rss",
        "https://feeds.feedburner.com/oreilly/radar",
        "https://www.newscientist.com/feed/home/",
    ],
}

CATEGORIES: list[str] = list(RSS_FEEDS)

TRENDING_KEYWORDS: list[str] = [
    "artificial intelligence",
    "machine learning",
    "blockchain",
    "cryptocurrency",
    "climate change",
    "sustainability",
    "renewable energy",
    "electric vehicles",
    "virtual reality",
    "augmented reality",
    "metaverse",
    "web3",
    "cybersecurity",
    "data privacy",
    "quantum computing",
    "biotechnology",
    "space exploration",
    "robotics",
    "automation",
    "digital transformation",
]
