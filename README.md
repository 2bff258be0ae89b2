# daisyplay

Tools for DAISY talking books (DAISY 2.02 and DAISY 3). The package finds a
book in a directory, an archive or on a mounted disc, locates its navigation
files (`ncc.html`, or `.ncx` and `.opf`), sizes its table of contents, works
out section times from the SMIL files, and keeps preferences and bookmarks.

## Installing

```
pip install .
```

Some steps call system tools when they are present: `unar` for RAR, CAB and
ISO 9660 archives, `amixer` for ALSA mixer state, and `eject` and
`udisksctl` for the CD drive. ZIP, EPUB, tar, gzip and bzip2 files are
unpacked without external tools.

## The `daisyplay` command

```
daisyplay path/to/book
daisyplay -D path/to/book.zip
daisyplay -c /dev/sr1
```

With a path, the book is taken from that directory, or unpacked from the
archive into a private directory below `/tmp` that is removed afterwards.
Without a path, the CD device (default `/dev/sr0`) must be a block device;
the command closes the tray, waits up to ten seconds for an ISO 9660 or UDF
file system to appear in `/proc/mounts` (trying `udisksctl mount`), and
unmounts again at the end if it mounted the disc itself.

The command then prints:

- if the book has a `discinfo.html`, the disc title, the total length and the
  list of books on the disc with their durations;
- with `-D`, a `SPINE (n):` listing of the items;
- otherwise one line naming the DAISY version, the number of items and the
  book directory.

It exits with 0 on success and 1 on an error, with the message on standard
error.

Options:

- `-c DEVICE` CD device to use
- `-d DEVICE:TYPE` output sound device; the value must contain `:`
- `-n` / `-y` (or `-j`) disable or enable CDDB; `-y` falls back to off when
  `cddbget` is not installed
- `-i`, `-T`, `-v`, `-N`, `-O` are accepted and recorded in `Options`
- `-D` print the spine
- `-h` show usage

## Library

- `daisyplay.markup`: `tokenize`, `read_tokens`, `Token`, `Attributes`,
  `clean_label`, `skip_to_anchor`, and `apply_attributes`, which gathers
  book settings (title, page count, total time, speed, ...) into a `BookInfo`.
- `daisyplay.paths`: `find_file`, `find_by_substring`, `find_index_names`
  (returns `IndexNames`) and `convert_url_name` for `%XX` escapes.
- `daisyplay.book`: `open_book` returns a `Book` with one `Item` per heading
  (DAISY 2.02) or per `itemref`/`navPoint` (DAISY 3, whichever count is
  larger); `create_ncc_html` writes an `ncc.html` for a bare directory of SMIL
  files; `BookError` marks books that cannot be played.
- `daisyplay.timecodes`: `read_time`, `parse_clock`, `clip_bounds`,
  `split_hms`, `parse_go_to_time`.
- `daisyplay.smil`: `audio_clips`, `item_duration`, `calculate_times` and
  `seek_offset`, working with `Clip`.
- `daisyplay.navigation`: `layout_items`, `next_item`, `previous_item`,
  `next_screen`, `previous_screen`, `search`, `change_level`.
- `daisyplay.display`: the text of the status line, item rows, clocks and
  help pages.
- `daisyplay.prefs`: `Preferences` and `Bookmark`, read and written by
  `load_preferences`, `save_preferences`, `load_bookmark`, `save_bookmark`;
  `bookmark_path` gives `~/.daisy-player/<title><mcn>`.
- `daisyplay.discinfo`: `parse_discinfo` and `total_duration`.
- `daisyplay.alsa`: `parse_asound_cards`, `parse_amixer` and
  `list_alsa_cards`, returning `SoundDevice` entries.
- `daisyplay.source`: `resolve_book_path`, `archive_kind`,
  `find_mount_point`, `make_tmp_dir`, `remove_tmp_dir`.

## What it does not do

There is no interactive screen and no audio playback: the command does not
play sections, react to keys, change volume or mute, or select a PulseAudio
sink, and the `-d` choice is not acted on. `open_book` only sizes the item
list; it does not fill in labels, levels, SMIL files or anchors, so the
`-D` listing shows empty file and anchor fields. Audio CDs are not read.
The command does not load or store bookmarks or preferences; `daisyplay.prefs`
offers that for callers of the library.

## Tests

```
pip install .[test]
pytest
```