from marketing_cms.utils.localization import localize

VIDEO_LOCALIZED_FIELDS = ("title", "description")


def normalize_video(video, lang=None):
    """
    Public videos use the camelCase card shape the site renders;
    admin views (lang=None) get every column.
    """
    data = video.to_dict()
    if lang is None:
        return data

    localized = localize(data, VIDEO_LOCALIZED_FIELDS, lang)
    return {
        "id": video.id,
        "title": localized["title"],
        "description": localized["description"],
        "videoUrl": video.video_url,
        "thumbnailUrl": video.thumbnail_url,
        "logoUrl": video.logo_url,
        "duration": video.duration,
        "displayOrder": video.display_order,
    }
