from marketing_cms.utils.localization import localize

BLOG_LOCALIZED_FIELDS = ("title", "content")


def normalize_blog_post(post, lang=None):
    """Admin views pass no language and get the raw columns."""
    data = post.to_dict()
    if lang is None:
        return data
    return localize(data, BLOG_LOCALIZED_FIELDS, lang)
