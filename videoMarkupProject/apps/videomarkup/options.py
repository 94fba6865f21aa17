"""Provider option tables for the YouTube and Vimeo embed parameters."""

from dataclasses import dataclass
from typing import Any, Mapping

from django.utils.text import format_lazy
from django.utils.translation import gettext_lazy as _

from apps.videomarkup.services.fields import COLLAPSED_YES, OptionDescriptor

YOUTUBE = "yt"
VIMEO = "vm"

ISO_639_URL = "http://www.loc.gov/standards/iso639-2/php/code_list.php"
ISO_639_LINK = f"[ISO 639-1]({ISO_639_URL})"

LANGUAGE_NOTE = _(
    "If multi-language support is installed, this will default to the `name` "
    "of the current user language."
)


@dataclass(frozen=True)
class Provider:
    namespace: str
    label: Any
    icon: str
    docs_url: str
    options: Mapping[str, OptionDescriptor]
    collapsed: int = COLLAPSED_YES

    @property
    def notes(self):
        return format_lazy(
            _("More information: {}"), f"[{self.docs_url}]({self.docs_url})"
        )


YOUTUBE_OPTIONS: dict[str, OptionDescriptor] = {
    "noCookie": OptionDescriptor(
        label=_("Enable privacy-enhanced mode?"),
        description=_(
            "When enabled, YouTube won't store information about visitors on "
            "your website unless they play the video."
        ),
    ),
    "autoplay": OptionDescriptor(
        label=_("Autoplay"),
        description=_(
            "Specifies whether the initial video will automatically start to "
            "play when the player loads."
        ),
    ),
    "cc_lang_pref": OptionDescriptor(
        type="text",
        label=_("Closed Captions Language Preference"),
        description=format_lazy(
            _(
                "Specifies the default language that the player will use to "
                "display captions. Set the value to an {} two-letter language code."
            ),
            ISO_639_LINK,
        ),
        notes=format_lazy(
            "{}\n{}",
            _(
                "If you use this parameter and also set the `cc_load_policy` "
                "parameter to 1, then the player will show captions in the "
                "specified language when the player loads. If you do not also "
                "set the `cc_load_policy` parameter, then captions will not "
                "display by default, but will display in the specified language "
                "if the user opts to turn captions on."
            ),
            LANGUAGE_NOTE,
        ),
    ),
    "cc_load_policy": OptionDescriptor(
        label=_("Closed Captions Load Policy"),
        description=_(
            "Enabling this causes closed captions to be shown by default, even "
            "if the user has turned captions off. The default behavior is based "
            "on user preference."
        ),
    ),
    "color": OptionDescriptor(
        label=_("Color"),
        description=format_lazy(
            _(
                "Specifies the color that will be used in the player's video "
                "progress bar to highlight the amount of the video that the "
                "viewer has already seen. By default, the player uses the color "
                "red in the video progress bar. See the {} for more information "
                "about color options."
            ),
            format_lazy(
                "[{}](http://youtube-eng.blogspot.com/2011/08/coming-soon-dark-player-for-embeds_5.html)",
                _("YouTube API blog"),
            ),
        ),
        notes=_("Setting the color parameter to white will disable the `modestbranding` option."),
        options={
            "": "",
            "red": _("Red"),
            "white": _("White"),
        },
    ),
    "controls": OptionDescriptor(
        label=_("Controls"),
        description=_("Indicates whether the video player controls are displayed."),
        notes=format_lazy(
            "{}\n{}",
            _("Off - Player controls do not display in the player."),
            _("On (default) - Player controls display in the player."),
        ),
    ),
    "disablekb": OptionDescriptor(
        label=_("Disable Keyboard Controls"),
        description=_("Disabling causes the player to not respond to keyboard controls."),
    ),
    "fs": OptionDescriptor(
        label=_("Fullscreen"),
        description=_("Display the fullscreen button in the player."),
    ),
    "hl": OptionDescriptor(
        type="text",
        label=_("Interface Language"),
        description=format_lazy(
            _(
                "Sets the player's interface language. The value is an {} "
                "two-letter language code or a fully specified locale. For "
                "example, fr and fr-ca are both valid values. Other language "
                "input codes, such as IETF language tags (BCP 47) might also be "
                "handled properly."
            ),
            ISO_639_LINK,
        ),
        notes=LANGUAGE_NOTE,
    ),
    "iv_load_policy": OptionDescriptor(
        label=_("Annotations Behaviour"),
        options={
            "": "",
            "1": _("Show annotations"),
            "3": _("Do not show annotations"),
        },
    ),
    "modestbranding": OptionDescriptor(
        label=_("Modest Branding"),
        description=_(
            "Lets you use a YouTube player that does not show a YouTube logo. "
            "Enable to prevent the YouTube logo from displaying in the control bar."
        ),
        notes=_(
            "When enabled, a small YouTube text label will still display in the "
            "upper-right corner of a paused video when the user's mouse pointer "
            "hovers over the player"
        ),
    ),
    "playsinline": OptionDescriptor(
        label=_("Play inline"),
        description=_(
            "Controls whether videos play inline or fullscreen in an HTML5 player on iOS."
        ),
    ),
    "rel": OptionDescriptor(
        label=_("Related Videos"),
        description=_(
            "If disabled, related videos will come from the same channel as the "
            "video that was just played."
        ),
        options={
            "": "",
            "0": _("Show from the same channel"),
            "1": _("Show from any channel"),
        },
    ),
}

VIMEO_OPTIONS: dict[str, OptionDescriptor] = {
    "autopause": OptionDescriptor(
        label=_("Autopause"),
        description=_(
            "Whether to pause the current video when another Vimeo video on the "
            "same page starts to play. Disable to permit simultaneous playback "
            "of all the videos on the page."
        ),
    ),
    "autoplay": OptionDescriptor(
        label=_("Autoplay"),
        description=_(
            "Whether to start playback of the video automatically. This feature "
            "might not work on all devices."
        ),
    ),
    "byline": OptionDescriptor(
        label=_("Byline"),
        description=_("Whether to display the video owner's name."),
    ),
    "color": OptionDescriptor(
        type="text",
        label=_("Color"),
        description=format_lazy(
            _(
                "The hexadecimal color value of the playback controls, which is "
                "normally {}. The embed settings of the video might override "
                "this value."
            ),
            "00ADEF",
        ),
        placeholder="00ADEF",
    ),
    "dnt": OptionDescriptor(
        label=_("Do Not Track"),
        description=_(
            "Whether to prevent the player from tracking session data, including cookies."
        ),
        notes=_("Keep in mind that enabling this also blocks video stats."),
    ),
    "fun": OptionDescriptor(
        label=_("Informal error messages"),
        description=_(
            "Whether to disable informal error messages in the player, such as *Oops*."
        ),
    ),
    "loop": OptionDescriptor(
        label=_("Loop"),
        description=_("Whether to restart the video automatically after reaching the end."),
    ),
    "muted": OptionDescriptor(
        label=_("Muted"),
        description=_(
            "Whether the video is muted upon loading. Enabling this is required "
            "for the autoplay behavior in some browsers."
        ),
    ),
    "playsinline": OptionDescriptor(
        label=_("Play inline"),
        description=_(
            "Whether the video plays inline on supported mobile devices. Disable "
            "to force the device to play the video in fullscreen mode instead."
        ),
    ),
    "portrait": OptionDescriptor(
        label=_("Portrait"),
        description=_("Whether to display the video owner's portrait."),
    ),
    "responsive": OptionDescriptor(
        label=_("Responsive"),
        description=_(
            "Whether to return a *responsive embed code*, or one that provides "
            "intelligent adjustments based on viewing conditions."
        ),
    ),
    "texttrack": OptionDescriptor(
        type="text",
        label=_("Text track"),
        description=_(
            "The text track to display with the video. Specify the text track by "
            "its language code (en), the language code and locale (en-US), or "
            "the language code and kind (en.captions)."
        ),
        notes=format_lazy(
            "{}\n{}",
            _(
                "For this argument to work, the video must already have a text "
                "track of the given type."
            ),
            LANGUAGE_NOTE,
        ),
    ),
    "title": OptionDescriptor(
        label=_("Title"),
        description=_("Whether the player displays the title overlay."),
    ),
    "transparent": OptionDescriptor(
        label=_("Transparent"),
        description=_(
            "Whether the responsive player and transparent background are enabled."
        ),
    ),
}

PROVIDERS: tuple[Provider, ...] = (
    Provider(
        namespace=YOUTUBE,
        label=_("YouTube Options"),
        icon="youtube",
        docs_url="https://developers.google.com/youtube/player_parameters#Parameters",
        options=YOUTUBE_OPTIONS,
    ),
    Provider(
        namespace=VIMEO,
        label=_("Vimeo Options"),
        icon="vimeo",
        docs_url="https://developer.vimeo.com/api/oembed/videos#table-2",
        options=VIMEO_OPTIONS,
    ),
)

