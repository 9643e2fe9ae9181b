import enum


class StatusEnum(enum.Enum):
    draft = "draft"
    publish = "publish"
    trash = "trash"


# タブの表示順とラベル
TAB_LABELS = {
    StatusEnum.publish: "Published",
    StatusEnum.draft: "Drafts",
    StatusEnum.trash: "Trashed",
}

# モーダルごとに選択できるステータス
ADD_STATUS_OPTIONS = (StatusEnum.draft, StatusEnum.publish)
EDIT_STATUS_OPTIONS = (StatusEnum.draft, StatusEnum.publish, StatusEnum.trash)
