from marketing_cms.utils.localization import localize

TEAM_LOCALIZED_FIELDS = ("name", "title", "bio")


def normalize_team_member(member, lang=None):
    data = member.to_dict()
    if lang is None:
        return data
    return localize(data, TEAM_LOCALIZED_FIELDS, lang)
